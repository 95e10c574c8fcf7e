"""
Standalone Builder - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn standalone_builder.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  Request ID → Logging → Preflight → CORS →  │
    │               GZip → Unhandled error                     │
    │                                                          │
    │  Routes:                                                 │
    │    /api/config  /api/pages/*  /api/standalone-pages/*    │
    │    /api/admin/stats  /health                             │
    │                                                          │
    │  Exception Handlers:                                     │
    │    StandaloneBuilderError → its status, {"error": msg}   │
    │    HTTPException (404/405) → {"error": msg}              │
    │    RequestValidationError → 400 {"error": msg}           │
    │    Exception → 500 {"error": "Internal server error"}    │
    └──────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from standalone_builder import __version__
from standalone_builder.config import settings
from standalone_builder.exceptions import StandaloneBuilderError
from standalone_builder.middleware.errors import INTERNAL_ERROR_MESSAGE, UnhandledErrorMiddleware
from standalone_builder.middleware.logging import RequestLoggingMiddleware
from standalone_builder.middleware.preflight import PreflightMiddleware, allowed_methods_for
from standalone_builder.middleware.request_id import RequestIDMiddleware, request_id_var
from standalone_builder.routes import admin, config, health, pages, standalone_pages

logger = logging.getLogger(__name__)

# Messages for framework-raised HTTP errors, matching the handlers' own wording
HTTP_ERROR_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The SDK logs every HTTP call at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate Supabase settings (logged, never fatal: /health and
           /api/config keep working, authenticated routes answer 500)
    """
    setup_logging()
    logger.info("%s API %s starting up...", settings.app_name, __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Authenticated routes will return 'Server configuration error'.")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("%s API shutting down.", settings.app_name)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Every failure leaves as `{"error": <message>}` with the right status.

    Security: stack traces and backend internals (`context`) are logged
    server-side only.
    """

    @app.exception_handler(StandaloneBuilderError)
    async def handle_app_error(request: Request, exc: StandaloneBuilderError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid, type(exc).__name__, exc.message, exc.context,
            )
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)

        headers = None
        if exc.status_code == 405:
            headers = {"Allow": ", ".join(allowed_methods_for(request.app.routes, request.scope))}
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_payload(),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level errors: unknown path (404), wrong method (405)."""
        message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        headers = getattr(exc, "headers", None)
        if exc.status_code == 405:
            # The router only reports the first route on the path
            headers = {"Allow": ", ".join(allowed_methods_for(request.app.routes, request.scope))}
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed bodies / params → 400 with the first problem, in words."""
        rid = request_id_var.get("")
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        logger.warning("[%s] Request validation failed: %s", rid, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Last resort for errors raised inside the middleware stack itself.
        Route errors are answered by UnhandledErrorMiddleware first.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Authenticated page storage for the Standalone Builder editor. "
            "Bearer tokens are Supabase access tokens."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition (last added = outermost):
    # RequestID → Logging → Preflight → CORS → GZip → UnhandledError → routes
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,  # bearer tokens, no cookies
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(PreflightMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(config.router)
    app.include_router(pages.router)
    app.include_router(standalone_pages.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    return app


app = create_app()
