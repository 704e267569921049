import re
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from vidproxy.core.errors import ApiError
from vidproxy.core.logging import log_info
from vidproxy.core.responses import json_response
from vidproxy.i18n import i18n
from vidproxy.models.response import DownloadResponse
from vidproxy.services.extractor import YouTubeExtractor, get_extractor
from vidproxy.services.info import FormatNotFound, VideoInfoService

router = APIRouter()

ITAG_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_itag(raw: str) -> int:
    """Plain ASCII integer only; the ValueError becomes a 500 in the middleware"""
    value = raw.strip()
    if not ITAG_PATTERN.fullmatch(value):
        raise ValueError(f"Malformed itag: {raw!r}")
    return int(value)


@router.get("/download", response_model=DownloadResponse)
async def download_link(
    request: Request,
    video_id: Optional[str] = Query(None, alias="id"),
    itag: Optional[str] = Query(None),
    media_type: Optional[str] = Query(None, alias="type"),
    extractor: YouTubeExtractor = Depends(get_extractor)
):
    """
    Resolve the direct media URL of one format.
    The media itself is never proxied; clients fetch the returned URL.
    """
    if not video_id or not itag:
        raise ApiError(400, i18n.error("missing_parameters"))
    if not extractor.validate_id(video_id):
        raise ApiError(404, i18n.error("invalid_video_id"))

    media_type = media_type or "video"
    itag_value = parse_itag(itag)

    try:
        payload = await VideoInfoService.download(extractor, video_id, itag_value, media_type)
    except FormatNotFound:
        raise ApiError(404, i18n.error("format_not_found"))

    log_info(request, i18n.get("log.format_resolved", itag=itag_value, video_id=video_id, filename=payload.filename))
    return json_response(payload)
