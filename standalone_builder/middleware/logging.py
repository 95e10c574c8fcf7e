"""
Standalone Builder - Request Logging Middleware
================================================

What:  One access-log line per HTTP request.
How:   Written after the response is produced, with the fields also passed
       as `extra` for structured handlers:

    GET /api/pages/list 200 12.4ms [a1b2c3d4] user=6f0e...

Levels:
    5xx → ERROR, 4xx → WARNING, OPTIONS preflights → DEBUG, rest → INFO

What we log vs what we DON'T log:
    ✅ method, path, status, duration, request id, authenticated user id
    ❌ request bodies (page content), query strings, the Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from standalone_builder.middleware.request_id import request_id_var

logger = logging.getLogger("standalone_builder.access")

ACCESS_FORMAT = "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] user=%(user_id)s"


def level_for(method: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if method == "OPTIONS":
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    `user_id` is whatever `get_current_user` stored on `request.state`;
    "-" for anonymous routes and requests rejected before authentication.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
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
            "user_id": getattr(request.state, "user_id", None) or "-",
        }
        logger.log(level_for(request.method, response.status_code), ACCESS_FORMAT, fields, extra=fields)
        return response
