"""
EduPro Backend: Access Log Middleware
=======================================

What:  One access log line per API request, correlated by request ID.
How:   Times the downstream call and logs once the response status is known.

Privacy:
    Only the method, route path, status, timing, client address and request
    ID are recorded. Note and report bodies, the Authorization header and the
    resolved owner email never reach the access log.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from edupro.middleware.request_id import request_id_var

logger = logging.getLogger("edupro.access")


def level_for_status(status_code: int) -> int:
    """5xx is an ERROR, 4xx (including every identity-gate 401) a WARNING."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging for everything except keep-alive and health pings."""

    QUIET_PATHS = frozenset({"/", "/health"})

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(response.status_code),
            "%(method)s %(path)s -> %(status)d in %(duration_ms).1fms [%(request_id)s] %(client_ip)s",
            fields,
            extra=fields,
        )
        return response
