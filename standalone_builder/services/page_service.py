"""
Standalone Builder - Page Service
==================================

What:  Save, list, fetch and delete pages on behalf of an authenticated user.
Who:   Called by routes/pages.py and routes/standalone_pages.py.
How:   Stateless; receives the backend and the resolved caller per call,
       the same way each route receives them from its dependencies.

Ownership:
    Every operation passes `user.id` down to the backend, which filters
    on it. A page owned by someone else is indistinguishable from a
    missing page (404), and deleting it is a silent no-op.

Timestamps:
    The service, not the database, stamps `updated_at` on every save and
    `created_at` on insert. Updates never send `created_at`, so it keeps
    its original value.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List

from standalone_builder.exceptions import (
    BackendServiceError,
    NotFoundError,
    ValidationError,
)
from standalone_builder.models import Page, PageStatus, UserIdentity
from standalone_builder.schemas.page import PageSummary, SavePageRequest
from standalone_builder.services.backend_base import BackendService, PageId
from standalone_builder.slug import resolve_slug

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PageService:
    """
    Business logic for the pages table.

    Error Handling Strategy:
        Backend failures arrive as BackendServiceError and are re-raised
        with the operation's public message ("Failed to fetch pages").
        Save failures keep the backend text in `details`.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self.clock = clock

    async def save_page(
        self,
        backend: BackendService,
        user: UserIdentity,
        request: SavePageRequest,
    ) -> Page:
        """
        Create or update a page.

        Without `id`: insert; `created_at` and `updated_at` set to now.
        With `id`:    update the caller's row; `updated_at` refreshed.
                      A falsy id (0, "") counts as no id.

        Raises:
            ValidationError:     no title
            NotFoundError:       `id` given but no page of the caller matched
            BackendServiceError: insert/update failed
        """
        if not request.title:
            raise ValidationError(message="Title is required", field="title")

        now = self.clock().isoformat()
        row = {
            "user_id": user.id,
            "title": request.title,
            "slug": resolve_slug(request.title, request.slug),
            "content": request.content or "",
            "content_json": request.content_json,
            "status": (request.status or PageStatus.DRAFT).value,
            "updated_at": now,
        }

        if request.id:
            try:
                page = await backend.update_page(request.id, user.id, row)
            except BackendServiceError as e:
                raise BackendServiceError(
                    message="Failed to update page",
                    context={**e.context, "page_id": str(request.id)},
                    details=e.details,
                ) from e
            if page is None:
                raise NotFoundError(resource="Page", resource_id=str(request.id))
        else:
            row["created_at"] = now
            try:
                page = await backend.insert_page(row)
            except BackendServiceError as e:
                raise BackendServiceError(
                    message="Failed to create page",
                    context=e.context,
                    details=e.details,
                ) from e

        logger.info("Page saved: %s (user=%s)", page.id, user.id)
        return page

    async def list_pages(
        self, backend: BackendService, user: UserIdentity
    ) -> List[PageSummary]:
        """The caller's pages without content, most recently updated first."""
        try:
            pages = await backend.list_pages(user.id)
        except BackendServiceError as e:
            raise BackendServiceError(
                message="Failed to fetch pages", context=e.context
            ) from e
        return [PageSummary.model_validate(page.model_dump()) for page in pages]

    async def get_page(
        self, backend: BackendService, user: UserIdentity, page_id: PageId
    ) -> Page:
        """
        One page of the caller.

        Backend errors (e.g. an id that is not a valid uuid) are reported as
        404 as well; from the caller's side the page simply is not there.
        """
        try:
            page = await backend.get_page(page_id, user.id)
        except BackendServiceError as e:
            logger.warning("Page lookup %s failed, reporting not found: %s", page_id, e.details)
            raise NotFoundError(resource="Page", resource_id=str(page_id)) from e

        if page is None:
            raise NotFoundError(resource="Page", resource_id=str(page_id))
        return page

    async def delete_page(
        self, backend: BackendService, user: UserIdentity, page_id: PageId
    ) -> None:
        """Delete one of the caller's pages. Missing ids are not an error."""
        try:
            deleted = await backend.delete_page(page_id, user.id)
        except BackendServiceError as e:
            raise BackendServiceError(
                message="Failed to delete page",
                context={**e.context, "page_id": str(page_id)},
            ) from e

        if deleted:
            logger.info("Page deleted: %s (user=%s)", page_id, user.id)
        else:
            logger.info("Delete matched no page: %s (user=%s)", page_id, user.id)


page_service = PageService()
