import asyncio
import os
import shutil

from fastapi import FastAPI, Request
from rich.console import Console
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidproxy.api import download, static, video
from vidproxy.config.settings import config, CONFIG_PATH
from vidproxy.core.errors import ApiError
from vidproxy.core.logging import log_info, setup_logging
from vidproxy.core.middleware import cors_and_errors
from vidproxy.core.responses import JSONUtf8Response, error_response
from vidproxy.core.state import state
from vidproxy.i18n import i18n
from vidproxy.services.ytdlp import YTDLPCommandBuilder, SubprocessExecutor, supports_js_runtimes

console = Console()

setup_logging()

app = FastAPI(
    title=config.api.title,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    openapi_url="/openapi.json" if config.api.debug else None,
    redoc_url=None,
    default_response_class=JSONUtf8Response,
)

# CORS, request ids and the catch-all 500
app.middleware("http")(cors_and_errors)

# Routes
app.include_router(video.router, tags=["Video"])
app.include_router(download.router, tags=["Download"])
app.include_router(static.router, tags=["Static"])


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    log_info(request, i18n.get("log.client_error", status=exc.status_code, message=exc.message))
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def endpoint_not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths (404) and known paths with another method (405)
    return error_response(404, i18n.error("endpoint_not_found"))


async def detect_ytdlp_version() -> str:
    try:
        result = await SubprocessExecutor.run(YTDLPCommandBuilder.build_version_command(), timeout=10.0)
    except (OSError, asyncio.TimeoutError) as e:
        console.print(f"[yellow]⚠ {i18n.get('startup.ytdlp_missing', reason=str(e))}[/yellow]")
        return "unknown"

    if result.returncode != 0:
        console.print(f"[yellow]⚠ {i18n.get('startup.ytdlp_missing', reason=result.stderr.decode(errors='ignore').strip())}[/yellow]")
        return "unknown"
    return result.stdout.decode().strip()


def detect_js_runtime():
    if config.ytdlp.js_runtime:
        return config.ytdlp.js_runtime
    if config.ytdlp.auto_detect_runtime:
        deno = shutil.which("deno")
        if deno:
            return f"deno:{deno}"
    return None


@app.on_event("startup")
async def startup_event():
    # Materialize an explicitly requested config file with the defaults
    if os.getenv("CONFIG_PATH") and not os.path.exists(CONFIG_PATH):
        config.save_to_file(CONFIG_PATH)

    state.js_runtime = detect_js_runtime()
    state.ytdlp_version = await detect_ytdlp_version()

    console.print(f"[green]✓ {i18n.get('startup.ytdlp_version', version=state.ytdlp_version)}[/green]")
    if state.js_runtime and supports_js_runtimes(state.ytdlp_version):
        console.print(f"[dim]JS runtime: {state.js_runtime}[/dim]")
    elif state.js_runtime:
        console.print(f"[yellow]⚠ {i18n.get('startup.js_runtime_unsupported', runtime=state.js_runtime, version=state.ytdlp_version)}[/yellow]")
    console.print(f"🚀 {i18n.get('startup.running', port=config.server.port)}")
