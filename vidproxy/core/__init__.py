from .errors import ApiError, ExtractionError
from .responses import error_response, json_response

__all__ = ["ApiError", "ExtractionError", "error_response", "json_response"]
