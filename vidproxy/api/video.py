from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from vidproxy.core.errors import ApiError
from vidproxy.core.logging import log_info
from vidproxy.core.responses import json_response
from vidproxy.i18n import i18n
from vidproxy.models.response import AudioResponse, VideoResponse
from vidproxy.services.extractor import YouTubeExtractor, get_extractor
from vidproxy.services.info import VideoInfoService

router = APIRouter()


def require_video_id(video_id: Optional[str], extractor: YouTubeExtractor) -> str:
    """400 when the id is missing, 404 when it is malformed"""
    if not video_id:
        raise ApiError(400, i18n.error("missing_video_id"))
    if not extractor.validate_id(video_id):
        raise ApiError(404, i18n.error("invalid_video_id"))
    return video_id


@router.get("/vid", response_model=VideoResponse)
async def get_video(
    request: Request,
    video_id: Optional[str] = Query(None, alias="id"),
    extractor: YouTubeExtractor = Depends(get_extractor)
):
    """Video details, streaming data, captions and every format"""
    video_id = require_video_id(video_id, extractor)

    log_info(request, i18n.get("log.fetching_info", video_id=video_id))
    payload = await VideoInfoService.video(extractor, video_id)
    log_info(request, i18n.get("log.info_retrieved", title=payload.video.get("title"), count=len(payload.formats)))
    return json_response(payload)


@router.get("/audio", response_model=AudioResponse)
async def get_audio(
    request: Request,
    video_id: Optional[str] = Query(None, alias="id"),
    extractor: YouTubeExtractor = Depends(get_extractor)
):
    """Audio-only formats sorted by bitrate"""
    video_id = require_video_id(video_id, extractor)

    log_info(request, i18n.get("log.fetching_info", video_id=video_id))
    return json_response(await VideoInfoService.audio(extractor, video_id))
