from typing import List, NamedTuple, Optional, Tuple
import asyncio
from vidproxy.config.settings import config
from vidproxy.core.state import state

# First release accepting --js-runtimes
JS_RUNTIMES_MIN_VERSION = (2025, 11, 12)


def parse_version(version: str) -> Optional[Tuple[int, ...]]:
    """yt-dlp versions are dates: "2025.11.12" or "2025.11.12.232906" (nightly)"""
    try:
        return tuple(int(part) for part in version.strip().split("."))
    except ValueError:
        return None


def supports_js_runtimes(version: str) -> bool:
    parsed = parse_version(version)
    return parsed is not None and parsed[:3] >= JS_RUNTIMES_MIN_VERSION


class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes

class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""

    @staticmethod
    async def run(
        cmd: List[str],
        timeout: float
    ) -> CompletedProcess:
        """
        Run subprocess with timeout and proper cleanup.
        The child is killed when the timeout expires or the caller is cancelled.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )

            return CompletedProcess(
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr
            )

        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise
        except BaseException:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

class YTDLPCommandBuilder:
    """Build yt-dlp commands"""

    @staticmethod
    def build_info_command(url: str) -> List[str]:
        """Build command for dumping video metadata as a single JSON object"""
        cmd = [
            config.ytdlp.binary,
            '--dump-json',
            '--no-playlist',
            '--no-warnings',
            '--socket-timeout', str(config.ytdlp.socket_timeout),
            '--retries', str(config.ytdlp.retries),
        ]

        if state.js_runtime and supports_js_runtimes(state.ytdlp_version):
            cmd.extend(['--js-runtimes', state.js_runtime])

        cmd.append(url)

        return cmd

    @staticmethod
    def build_version_command() -> List[str]:
        return [config.ytdlp.binary, '--version']
