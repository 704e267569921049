from typing import Optional

from fastapi import HTTPException


class ApiError(HTTPException):
    """Client-facing error rendered as ``{"error": true, "message": ...}``"""

    def __init__(self, status_code: int, message: str, headers: Optional[dict] = None):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message = message


class ExtractionError(Exception):
    """Raised when yt-dlp fails to produce usable metadata"""

    def __init__(self, message: str, *, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode
