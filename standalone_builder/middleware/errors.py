"""
Standalone Builder - Unhandled Error Middleware
================================================

What:  Turns any exception that escapes a route into
       500 {"error": "Internal server error"}.
Why:   FastAPI runs its `Exception` handler in ServerErrorMiddleware, outside
       every user middleware, so that response would carry neither CORS
       headers nor X-Request-ID. Installed innermost, this response travels
       back out through CORS, logging and request-id like any other.

Application errors (StandaloneBuilderError, HTTPException) never get here:
the exception handlers registered in main.py answer them first.
"""

import logging

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from standalone_builder.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class UnhandledErrorMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""), request.method, request.url.path, str(exc),
                exc_info=True,
            )
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
