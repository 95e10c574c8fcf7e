"""
Standalone Builder - CORS Preflight Middleware
===============================================

What:  Answers every OPTIONS request with an empty 200 and permissive CORS
       headers, before routing.
Why:   The builder runs on arbitrary origins, and some embedders send bare
       OPTIONS requests without the `Access-Control-Request-Method` header.
       Starlette's CORSMiddleware only treats requests carrying that header
       as preflights and lets the rest fall through to a 405. Short-
       circuiting here gives one answer for both.

Allowed methods are read from the first visible route whose path matches,
so /api/pages/save advertises "POST, OPTIONS" and /api/pages/{id}
advertises "DELETE, GET, OPTIONS".
"""

from typing import Iterable, List

from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match

ALLOWED_HEADERS = "Content-Type, Authorization"
DEFAULT_METHODS = ("GET", "POST", "DELETE")


def allowed_methods_for(routes: Iterable, scope: dict) -> List[str]:
    """
    Methods served at the path of the first schema-visible route matching
    the scope, across every route registered on that same path.
    """
    visible = [r for r in routes if isinstance(r, APIRoute) and r.include_in_schema]
    for route in visible:
        match, _ = route.matches(scope)
        if match != Match.NONE:
            methods = set()
            for other in visible:
                if other.path == route.path:
                    methods.update(other.methods or ())
            return sorted(methods)
    return list(DEFAULT_METHODS)


class PreflightMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "OPTIONS":
            return await call_next(request)

        methods = allowed_methods_for(request.app.routes, request.scope)
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": ", ".join(methods + ["OPTIONS"]),
                "Access-Control-Allow-Headers": ALLOWED_HEADERS,
                "Access-Control-Max-Age": "600",
            },
        )
