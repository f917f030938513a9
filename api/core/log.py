"""
Logging setup and request logging middleware.

Modules log through `logging.getLogger(__name__)` using
`event_name key=value` messages.
"""

from __future__ import annotations

import logging
import time

from fastapi import Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import settings

logger = logging.getLogger("copilot.http")

NO_ROUTE_DETAIL = "Not Found"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    root = logging.getLogger()
    level = getattr(logging, settings.log_level(), logging.INFO)
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000.0
    logger.info(
        "request method=%s path=%s status=%s duration_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
    # The router raises a bare 404 ("Not Found") when nothing matched; 404s raised
    # by services carry their own detail and pass through unchanged.
    if exc.status_code != 404 or exc.detail != NO_ROUTE_DETAIL:
        return await http_exception_handler(request, exc)
    logger.warning("route_not_found method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=404, content={"error": "Route not found"})
