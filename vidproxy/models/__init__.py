from .internal import ExtractedInfo, FormatDescriptor
from .response import AudioResponse, DownloadResponse, ErrorResponse, VideoResponse

__all__ = [
    "AudioResponse",
    "DownloadResponse",
    "ErrorResponse",
    "ExtractedInfo",
    "FormatDescriptor",
    "VideoResponse",
]
