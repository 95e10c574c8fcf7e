"""
Standalone Builder - Admin Service
===================================

What:  Aggregate statistics for the admin dashboard.
Who:   Called by GET /api/admin/stats.

Access:
    Membership in the admins table is the only thing that grants access.
    A failed membership lookup is treated as "not an admin".

Payload composition:
    counts       → three exact counts over all pages
    usersList    → full auth user directory
    pagesList    → the N most recently updated pages, each tagged with the
                   owner's email (or a fallback label)
    page_count   → pages of that user within pagesList
"""

import logging
from collections import Counter

from standalone_builder.config import settings
from standalone_builder.exceptions import BackendServiceError, ForbiddenError
from standalone_builder.models import PageStatus, UserIdentity
from standalone_builder.schemas.admin import (
    AdminPageSummary,
    AdminStatsResponse,
    AdminUserSummary,
)
from standalone_builder.services.backend_base import BackendService

logger = logging.getLogger(__name__)


class AdminService:

    async def require_admin(self, backend: BackendService, user: UserIdentity) -> None:
        try:
            is_admin = await backend.is_admin(user.id)
        except BackendServiceError:
            logger.warning("Admin lookup failed for user %s; denying access", user.id)
            is_admin = False

        if not is_admin:
            logger.warning("Non-admin user %s requested admin statistics", user.id)
            raise ForbiddenError()

    async def get_stats(
        self, backend: BackendService, user: UserIdentity
    ) -> AdminStatsResponse:
        """
        Raises:
            ForbiddenError:      caller is not in the admins table
            BackendServiceError: any statistics query failed
        """
        await self.require_admin(backend, user)

        try:
            total = await backend.count_pages()
            published = await backend.count_pages(status=PageStatus.PUBLISHED.value)
            drafts = await backend.count_pages(status=PageStatus.DRAFT.value)
            users = await backend.list_users()
            pages = await backend.list_recent_pages(settings.admin_pages_limit)
        except BackendServiceError as e:
            raise BackendServiceError(
                message="Failed to load admin statistics", context=e.context
            ) from e

        emails = {u.id: u.email for u in users}
        pages_per_user = Counter(p.user_id for p in pages)

        pages_list = [
            AdminPageSummary(
                id=p.id,
                title=p.title,
                slug=p.slug,
                status=p.status,
                user_id=p.user_id,
                created_at=p.created_at,
                updated_at=p.updated_at,
                user_email=emails.get(p.user_id) or settings.unknown_email_label,
            )
            for p in pages
        ]
        users_list = [
            AdminUserSummary(
                id=u.id,
                email=u.email,
                created_at=u.created_at,
                last_sign_in_at=u.last_sign_in_at,
                page_count=pages_per_user.get(u.id, 0),
            )
            for u in users
        ]

        return AdminStatsResponse(
            users=len(users),
            pages=total,
            published=published,
            drafts=drafts,
            users_list=users_list,
            pages_list=pages_list,
        )


admin_service = AdminService()
