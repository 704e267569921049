from typing import Any, Dict

from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from vidproxy.config.settings import config
from vidproxy.models.response import ErrorResponse


class JSONUtf8Response(JSONResponse):
    media_type = "application/json; charset=utf-8"


def cors_headers() -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": config.cors.allow_origin,
        "Access-Control-Allow-Methods": config.cors.allow_methods,
        "Access-Control-Allow-Headers": config.cors.allow_headers,
    }


def apply_cors(response: Response) -> Response:
    """Attach the CORS headers to any outgoing response"""
    response.headers.update(cors_headers())
    return response


def json_response(payload: Any, status_code: int = 200) -> JSONUtf8Response:
    """Wrap a payload (pydantic model or plain data) as a JSON response"""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    return JSONUtf8Response(content=payload, status_code=status_code, headers=cors_headers())


def error_response(status_code: int, message: str) -> JSONUtf8Response:
    return json_response(ErrorResponse(message=message), status_code=status_code)
