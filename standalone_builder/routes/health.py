"""
Standalone Builder - Health Check Route
========================================

What:  GET /health for container health checks and uptime monitors.
How:   Reports whether the server-side Supabase settings are present. It
       does not call Supabase: checks run every few seconds and the backend
       is a metered external service.

Status levels:
    healthy:  backend configured
    degraded: process is up but authenticated routes will answer 500
"""

import time

from fastapi import APIRouter

from standalone_builder import __version__
from standalone_builder.config import settings
from standalone_builder.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    configured = settings.backend_configured
    return HealthResponse(
        status="healthy" if configured else "degraded",
        version=__version__,
        backend="configured" if configured else "not_configured",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
