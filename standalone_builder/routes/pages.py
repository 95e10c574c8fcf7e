"""
Standalone Builder - Page Route Handlers
=========================================

What:  Save, list, fetch and delete the caller's pages.
Who:   Called by the editor through PageServiceClient.

Auth:
    Every route depends on `get_current_user`, which forwards the bearer
    token to Supabase. The resolved user id scopes every query.

Route order matters:
    /pages/save and /pages/list are registered before /pages/{page_id}, and
    the methods they do not support are claimed explicitly so that e.g.
    GET /api/pages/save is a 405 instead of a lookup of page "save".
"""

import logging

from fastapi import APIRouter, Depends

from standalone_builder.dependencies import get_backend_service, get_current_user
from standalone_builder.exceptions import MethodNotAllowedError
from standalone_builder.models import UserIdentity
from standalone_builder.schemas.common import ErrorResponse
from standalone_builder.schemas.page import (
    DeleteResponse,
    PageListResponse,
    PageResponse,
    SavePageRequest,
)
from standalone_builder.services.backend_base import BackendService
from standalone_builder.services.page_service import page_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pages"])

AUTH_ERRORS = {
    401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
    500: {"description": "Server configuration or backend error", "model": ErrorResponse},
}


@router.post(
    "/pages/save",
    response_model=PageResponse,
    responses={
        **AUTH_ERRORS,
        400: {"description": "Title is required", "model": ErrorResponse},
        404: {"description": "Page to update not found", "model": ErrorResponse},
    },
    summary="Create or update a page",
    description=(
        "Creates a page when no `id` is given, otherwise updates the caller's page "
        "with that id. The slug is derived from the title when omitted."
    ),
)
async def save_page(
    body: SavePageRequest,
    user: UserIdentity = Depends(get_current_user),
    backend: BackendService = Depends(get_backend_service),
) -> PageResponse:
    page = await page_service.save_page(backend=backend, user=user, request=body)
    return PageResponse(page=page)


@router.get(
    "/pages/list",
    response_model=PageListResponse,
    responses=AUTH_ERRORS,
    summary="List the caller's pages",
    description="Pages without content, most recently updated first.",
)
async def list_pages(
    user: UserIdentity = Depends(get_current_user),
    backend: BackendService = Depends(get_backend_service),
) -> PageListResponse:
    pages = await page_service.list_pages(backend=backend, user=user)
    return PageListResponse(pages=pages)


@router.api_route("/pages/save", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
@router.api_route("/pages/list", methods=["POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def reserved_path_method_not_allowed() -> None:
    raise MethodNotAllowedError()


@router.get(
    "/pages/{page_id}",
    response_model=PageResponse,
    responses={**AUTH_ERRORS, 404: {"description": "Page not found", "model": ErrorResponse}},
    summary="Get one of the caller's pages",
)
async def get_page(
    page_id: str,
    user: UserIdentity = Depends(get_current_user),
    backend: BackendService = Depends(get_backend_service),
) -> PageResponse:
    page = await page_service.get_page(backend=backend, user=user, page_id=page_id)
    return PageResponse(page=page)


@router.delete(
    "/pages/{page_id}",
    response_model=DeleteResponse,
    responses=AUTH_ERRORS,
    summary="Delete one of the caller's pages",
    description="Succeeds even when no page matched (already deleted or not owned).",
)
async def delete_page(
    page_id: str,
    user: UserIdentity = Depends(get_current_user),
    backend: BackendService = Depends(get_backend_service),
) -> DeleteResponse:
    await page_service.delete_page(backend=backend, user=user, page_id=page_id)
    return DeleteResponse()
