"""
Standalone Builder - Public Configuration Route
================================================

What:  GET /api/config returns the values a client needs to build its own
       Supabase client: project URL and the public anon key.
Security:
    Only public values. The service role key must NEVER be added here.
"""

from fastapi import APIRouter

from standalone_builder import __version__
from standalone_builder.config import settings
from standalone_builder.schemas.common import ConfigResponse, ErrorResponse

router = APIRouter(prefix="/api", tags=["Config"])


@router.get(
    "/config",
    response_model=ConfigResponse,
    responses={405: {"description": "Method not allowed", "model": ErrorResponse}},
    summary="Public client configuration",
)
async def get_config() -> ConfigResponse:
    return ConfigResponse(
        supabase_url=settings.supabase_url or "",
        supabase_anon_key=settings.supabase_anon_key or "",
        app_name=settings.app_name,
        version=__version__,
    )
