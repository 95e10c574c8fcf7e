"""
Standalone Builder - Request ID Middleware
===========================================

What:  Assigns an id to each request and returns it in `X-Request-ID`.
Why:   Ties every log line of a request together; the editor shows the id
       next to error messages so users can quote it.
How:   A client-supplied `X-Request-ID` is reused when it looks like an id
       (1-64 chars of [A-Za-z0-9._-]); anything else is replaced by a fresh
       8-char id. The value lives in a ContextVar so exception handlers can
       read it without the request.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(supplied: Optional[str]) -> str:
    # Client ids end up verbatim in log lines
    if supplied and _VALID_REQUEST_ID.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
