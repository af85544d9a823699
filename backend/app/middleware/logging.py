"""
Showcase Backend — Access Log Middleware
========================================

What:  One line per request on the `showcase.access` logger.
Why:   A submission is one Cloudinary round trip per image; logging the
       request size next to the duration shows which uploads are slow and why.
How:   Times call_next and logs method, path, status, duration and the
       declared Content-Length. The request ID is added by RequestIDFilter.

Body contents (form text, image bytes) are never logged.
"""

import logging
import time
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger("showcase.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Args:
        app: The wrapped ASGI app.
        quiet_paths: Paths polled by health checks (GET /health) that are not logged.
    """

    def __init__(self, app: ASGIApp, quiet_paths: Iterable[str] = ("/health",)):
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.quiet_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.log(
            _level_for(response.status_code),
            "%s %s -> %d in %.1fms (%s bytes in)",
            request.method,
            path,
            response.status_code,
            duration_ms,
            request.headers.get("content-length", "0"),
        )
        return response
