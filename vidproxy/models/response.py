from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from vidproxy.models.internal import FormatDescriptor


class VideoResponse(BaseModel):
    """Full extraction result for /vid"""
    video: Dict[str, Any]
    stream: Dict[str, Any]
    captions: Optional[Dict[str, Any]] = None
    formats: List[FormatDescriptor]


class AudioResponse(BaseModel):
    """Audio-only formats, best bitrate first"""
    audio: List[FormatDescriptor]
    videoDetails: Dict[str, Any]


class DownloadResponse(BaseModel):
    """Direct media URL for a single format"""
    url: Optional[str] = None
    filename: str
    title: str
    quality: str
    type: str


class ErrorResponse(BaseModel):
    error: bool = True
    message: str
