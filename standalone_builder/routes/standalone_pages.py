"""
Standalone Builder - Query-String Page Routes
==============================================

What:  GET /api/standalone-pages/get?id= and DELETE /api/standalone-pages/delete?id=
Why:   Older editor builds address pages by query string. Same semantics
       and service calls as /api/pages/{id}, which is the canonical form.

The id check runs before authentication: a request without `?id=` is a
400 whether or not it carries a token.
"""

from fastapi import APIRouter, Depends

from standalone_builder.dependencies import (
    get_backend_service,
    get_current_user,
    require_page_id,
)
from standalone_builder.models import UserIdentity
from standalone_builder.schemas.common import ErrorResponse
from standalone_builder.schemas.page import DeleteResponse, PageResponse
from standalone_builder.services.backend_base import BackendService
from standalone_builder.services.page_service import page_service

router = APIRouter(prefix="/api/standalone-pages", tags=["Pages (query-string)"])

ERRORS = {
    400: {"description": "Page ID is required", "model": ErrorResponse},
    401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
    500: {"description": "Server configuration or backend error", "model": ErrorResponse},
}


@router.get(
    "/get",
    response_model=PageResponse,
    responses={**ERRORS, 404: {"description": "Page not found", "model": ErrorResponse}},
    summary="Get one of the caller's pages by ?id=",
)
async def get_page(
    page_id: str = Depends(require_page_id),
    user: UserIdentity = Depends(get_current_user),
    backend: BackendService = Depends(get_backend_service),
) -> PageResponse:
    page = await page_service.get_page(backend=backend, user=user, page_id=page_id)
    return PageResponse(page=page)


@router.delete(
    "/delete",
    response_model=DeleteResponse,
    responses=ERRORS,
    summary="Delete one of the caller's pages by ?id=",
)
async def delete_page(
    page_id: str = Depends(require_page_id),
    user: UserIdentity = Depends(get_current_user),
    backend: BackendService = Depends(get_backend_service),
) -> DeleteResponse:
    await page_service.delete_page(backend=backend, user=user, page_id=page_id)
    return DeleteResponse()
