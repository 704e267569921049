from fastapi import Request
import logging
from typing import Any

from rich.logging import RichHandler

from vidproxy.config.settings import config

logger = logging.getLogger("vidproxy")


class RequestIdFilter(logging.Filter):
    """Records logged outside a request (startup, config) get request_id '-'"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def setup_logging() -> None:
    """
    Attach a single handler to the service logger.
    Rich output is used unless disabled in config.
    """
    if logger.handlers:
        return

    if config.logging.enable_rich:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.logging.format))
    handler.addFilter(RequestIdFilter())

    logger.addHandler(handler)
    logger.setLevel(config.logging.level)
    logger.propagate = False

def log_with_context(
    request: Request,
    level: int,
    message: str,
    exc_info: bool = False,
    **kwargs: Any
) -> None:
    """
    Log with request context.
    Automatically includes request_id for tracing.
    """
    extra = {
        "request_id": getattr(request.state, "request_id", "-"),
        **kwargs
    }
    logger.log(level, message, extra=extra, exc_info=exc_info)

def log_info(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.INFO, message, **kwargs)

def log_exception(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.ERROR, message, exc_info=True, **kwargs)
