"""
EduPro Backend: Request ID Middleware
========================================

What:  Assigns a short correlation ID to each request and returns it in the
       `X-Request-ID` response header.
Why:   Auth failures are answered with one generic message; the request ID is
       how a specific failure is matched to its server-side log line.
How:   Reuses a client-supplied X-Request-ID or generates one, stores it in a
       ContextVar (per-coroutine) and in request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if present
        2. Otherwise generate an 8-character ID
        3. Store in ContextVar (loggers, exception handlers) and request.state (handlers)
        4. Echo it back in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
