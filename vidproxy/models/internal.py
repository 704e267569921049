from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class FormatDescriptor(BaseModel):
    """One downloadable stream variant, keyed the way the player exposes it"""
    itag: Optional[int] = None
    url: Optional[str] = None
    mimeType: Optional[str] = None
    container: Optional[str] = None
    codecs: Optional[str] = None
    videoCodec: Optional[str] = None
    audioCodec: Optional[str] = None
    qualityLabel: Optional[str] = None
    bitrate: Optional[int] = None
    audioBitrate: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    contentLength: Optional[int] = None
    hasVideo: bool = False
    hasAudio: bool = False
    isHLS: bool = False

class ExtractedInfo(BaseModel):
    """Extraction result (separated from HTTP concerns)"""
    details: Dict[str, Any]
    streaming_data: Dict[str, Any]
    captions: Optional[Dict[str, Any]] = None
    formats: List[FormatDescriptor] = Field(default_factory=list)
