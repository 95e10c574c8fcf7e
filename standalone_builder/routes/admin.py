"""
Standalone Builder - Admin Route
=================================

What:  GET /api/admin/stats, the admin dashboard's single data source.
Auth:  bearer token (401) + membership in the admins table (403).
"""

from fastapi import APIRouter, Depends

from standalone_builder.dependencies import get_backend_service, get_current_user
from standalone_builder.models import UserIdentity
from standalone_builder.schemas.admin import AdminStatsResponse
from standalone_builder.schemas.common import ErrorResponse
from standalone_builder.services.admin_service import admin_service
from standalone_builder.services.backend_base import BackendService

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get(
    "/stats",
    response_model=AdminStatsResponse,
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        403: {"description": "Admin access required", "model": ErrorResponse},
        500: {"description": "Server configuration or backend error", "model": ErrorResponse},
    },
    summary="Aggregate user and page statistics",
)
async def get_stats(
    user: UserIdentity = Depends(get_current_user),
    backend: BackendService = Depends(get_backend_service),
) -> AdminStatsResponse:
    return await admin_service.get_stats(backend=backend, user=user)
