import asyncio
import json
import re
from typing import Any, Dict, Iterable, List, Optional

from vidproxy.config.settings import config
from vidproxy.core.errors import ExtractionError
from vidproxy.models.internal import ExtractedInfo, FormatDescriptor
from vidproxy.services.format import FormatMapper
from vidproxy.services.ytdlp import YTDLPCommandBuilder, SubprocessExecutor

VIDEO_ID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]{11}$')
STDERR_MAX_CHARS = 200


class YouTubeExtractor:
    """
    Metadata collaborator backed by the yt-dlp CLI.

    yt-dlp's info dict is reshaped into the player-style structures the
    HTTP layer serves: video details, streaming data, captions and a flat
    list of format descriptors.
    """

    @staticmethod
    def validate_id(video_id: str) -> bool:
        return bool(VIDEO_ID_PATTERN.match(video_id.strip()))

    async def fetch_info(self, video_id: str) -> ExtractedInfo:
        url = config.ytdlp.watch_url.format(video_id=video_id.strip())
        cmd = YTDLPCommandBuilder.build_info_command(url)

        try:
            result = await SubprocessExecutor.run(cmd, timeout=config.ytdlp.info_timeout)
        except asyncio.TimeoutError as e:
            raise ExtractionError(f"yt-dlp timed out after {config.ytdlp.info_timeout}s") from e
        except OSError as e:
            raise ExtractionError(f"Failed to start yt-dlp: {e}") from e

        if result.returncode != 0:
            error_msg = result.stderr.decode(errors="ignore").strip()
            raise ExtractionError(
                f"yt-dlp exited with {result.returncode}: {error_msg[:STDERR_MAX_CHARS]}",
                returncode=result.returncode
            )

        try:
            info = json.loads(result.stdout.decode(errors="ignore"))
        except json.JSONDecodeError as e:
            raise ExtractionError("Failed to parse yt-dlp output") from e

        if not isinstance(info, dict):
            raise ExtractionError("yt-dlp returned an unexpected data structure")

        return self.build_info(info)

    @classmethod
    def build_info(cls, info: Dict[str, Any]) -> ExtractedInfo:
        formats = FormatMapper.map_formats(info.get("formats") or [])
        return ExtractedInfo(
            details=cls.build_details(info),
            streaming_data=cls.build_streaming_data(info, formats),
            captions=cls.build_captions(info),
            formats=formats,
        )

    @staticmethod
    def filter_audio_only(formats: Iterable[FormatDescriptor]) -> List[FormatDescriptor]:
        return [f for f in formats if f.hasAudio and not f.hasVideo]

    @staticmethod
    def build_details(info: Dict[str, Any]) -> Dict[str, Any]:
        duration = info.get("duration")
        view_count = info.get("view_count")
        thumbnails = [
            {"url": t.get("url"), "width": t.get("width"), "height": t.get("height")}
            for t in info.get("thumbnails") or []
            if t.get("url")
        ]

        return {
            "videoId": info.get("id"),
            "title": info.get("title") or "",
            "lengthSeconds": str(int(duration)) if duration is not None else None,
            "keywords": info.get("tags") or [],
            "channelId": info.get("channel_id"),
            "shortDescription": info.get("description"),
            "viewCount": str(view_count) if view_count is not None else None,
            "author": info.get("uploader") or info.get("channel"),
            "isLiveContent": bool(info.get("is_live") or info.get("was_live")),
            "isPrivate": info.get("availability") == "private",
            "thumbnail": {"thumbnails": thumbnails},
        }

    @staticmethod
    def build_streaming_data(info: Dict[str, Any], formats: List[FormatDescriptor]) -> Dict[str, Any]:
        muxed = [f for f in formats if f.hasVideo and f.hasAudio]
        adaptive = [f for f in formats if not (f.hasVideo and f.hasAudio)]
        return {
            "formats": [f.model_dump() for f in muxed],
            "adaptiveFormats": [f.model_dump() for f in adaptive],
            "hlsManifestUrl": info.get("manifest_url"),
        }

    @staticmethod
    def build_captions(info: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """None only when yt-dlp reported no caption data at all"""
        subtitles = info.get("subtitles")
        automatic = info.get("automatic_captions")
        if subtitles is None and automatic is None:
            return None
        return {"subtitles": subtitles, "automaticCaptions": automatic}


extractor = YouTubeExtractor()


def get_extractor() -> YouTubeExtractor:
    """FastAPI dependency"""
    return extractor
