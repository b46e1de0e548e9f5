"""
Trace ID middleware.

Takes X-Trace-Id from the request (or generates one), binds it to the
structlog context for every log line of the request and echoes it back on
the response.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

TRACE_HEADER = "X-Trace-Id"


class TraceMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex

        structlog.contextvars.bind_contextvars(
            trace_id=trace_id, path=request.url.path
        )
        try:
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars("trace_id", "path")
