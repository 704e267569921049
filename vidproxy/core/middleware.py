import uuid

from fastapi import Request
from fastapi.responses import Response

from vidproxy.core.logging import log_exception, log_info
from vidproxy.core.responses import apply_cors, error_response
from vidproxy.i18n import i18n

REQUEST_ID_HEADER = "X-Request-ID"


async def cors_and_errors(request: Request, call_next) -> Response:
    """
    Outermost request handler.

    Answers preflight requests, tags the request with an id, converts any
    exception that escaped the routes into a generic 500 and attaches the
    CORS headers to whatever goes out.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id

    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    log_info(request, i18n.get("log.request", path=path))

    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        try:
            response = await call_next(request)
        except Exception:
            log_exception(request, i18n.get("log.unhandled", path=request.url.path))
            response = error_response(500, i18n.error("internal"))

    response.headers[REQUEST_ID_HEADER] = request_id
    return apply_cors(response)
