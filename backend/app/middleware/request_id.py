"""
Showcase Backend — Request ID Propagation
=========================================

What:  Gives every request an ID, echoes it in X-Request-ID and stamps it on
       every log record emitted while the request is handled.
Why:   One submission logs from several layers (parse, one line per image
       upload, the insert); the ID ties those lines together and lets the
       site quote it when reporting an error.
How:   RequestIDMiddleware binds the ID to a ContextVar for the duration of
       the request. RequestIDFilter copies the current value onto each
       LogRecord, so setup_logging() can use %(request_id)s in its format.

Outside a request (startup, shutdown) records carry "-".
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

request_id_var: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


class RequestIDFilter(logging.Filter):
    """Adds `request_id` to every record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds the client's X-Request-ID, or a fresh one, to the request context."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
