"""
Standalone Builder - Supabase Backend Service
==============================================

What:  BackendService implementation on top of the supabase-py async client.
Why:   Supabase provides the auth (GoTrue) and table storage (PostgREST);
       this module is the only place that knows its query builder and
       error types.
How:   One AsyncClient per (url, service key), created lazily on first use
       and reused across requests. The client carries no per-request state:
       tokens are passed explicitly to `auth.get_user(token)`.
Who:   Built by `dependencies.get_backend_service`; called by PageService,
       AdminService and the `get_current_user` dependency.

Error translation:
    AuthError (invalid/expired JWT)   → InvalidTokenError      (401)
    PostgrestAPIError                 → BackendServiceError    (500)
    transport / unexpected errors     → BackendServiceError    (500)
    client construction failure       → ConfigurationError     (500)

No retries: every call is a single shot and failures surface immediately.
"""

import logging
from typing import Any, Dict, List, Optional

from supabase import AsyncClient, AuthError, PostgrestAPIError, acreate_client

from standalone_builder.config import settings
from standalone_builder.exceptions import (
    BackendServiceError,
    ConfigurationError,
    InvalidTokenError,
)
from standalone_builder.models import PAGE_SUMMARY_COLUMNS, Page, UserIdentity
from standalone_builder.services.backend_base import BackendService, PageId

logger = logging.getLogger(__name__)

_SUMMARY_SELECT = ",".join(PAGE_SUMMARY_COLUMNS)
_ADMIN_PAGE_SELECT = ",".join(PAGE_SUMMARY_COLUMNS + ("user_id",))


class SupabaseBackendService(BackendService):
    """
    Privileged Supabase access (service role key).

    The service role bypasses row-level security, which is why every
    owner-scoped method filters on `user_id` explicitly.
    """

    def __init__(
        self,
        url: str,
        service_key: str,
        client: Optional[AsyncClient] = None,
        pages_table: Optional[str] = None,
        admins_table: Optional[str] = None,
    ):
        self.url = url
        self._service_key = service_key
        self._client = client
        self.pages_table = pages_table or settings.pages_table
        self.admins_table = admins_table or settings.admins_table

    async def _get_client(self) -> AsyncClient:
        if self._client is None:
            try:
                self._client = await acreate_client(self.url, self._service_key)
            except Exception as e:
                # Malformed URL or key: an operator problem, not a client one
                logger.error("Could not create Supabase client for %s: %s", self.url, str(e))
                raise ConfigurationError(context={"error_type": type(e).__name__}) from e
            logger.info("Supabase client initialized for %s", self.url)
        return self._client

    async def _execute(self, query: Any, operation: str) -> Any:
        """Run a PostgREST query, translating SDK errors."""
        try:
            return await query.execute()
        except PostgrestAPIError as e:
            logger.error(
                "Supabase %s failed: code=%s message=%s", operation, e.code, e.message
            )
            raise BackendServiceError(
                context={"operation": operation, "code": e.code},
                details=e.message,
            ) from e
        except Exception as e:
            logger.error("Supabase %s failed: %s", operation, str(e), exc_info=True)
            raise BackendServiceError(
                context={"operation": operation, "error_type": type(e).__name__},
                details=str(e) or type(e).__name__,
            ) from e

    async def _pages(self):
        client = await self._get_client()
        return client.table(self.pages_table)

    # ══════════════════════════════════════════════════════════════════════
    # Identity
    # ══════════════════════════════════════════════════════════════════════

    async def get_user(self, token: str) -> UserIdentity:
        client = await self._get_client()
        try:
            response = await client.auth.get_user(token)
        except AuthError as e:
            logger.warning("Token rejected by Supabase auth: %s", e.message)
            raise InvalidTokenError(context={"auth_error": e.message}) from e
        except Exception as e:
            logger.error("Supabase auth lookup failed: %s", str(e), exc_info=True)
            raise BackendServiceError(
                context={"operation": "auth.get_user", "error_type": type(e).__name__},
            ) from e

        if response is None or response.user is None:
            raise InvalidTokenError()
        return UserIdentity.from_sdk_user(response.user)

    async def is_admin(self, user_id: str) -> bool:
        client = await self._get_client()
        query = (
            client.table(self.admins_table)
            .select("id")
            .eq("user_id", user_id)
            .limit(1)
        )
        response = await self._execute(query, "admins.select")
        return bool(response.data)

    async def list_users(self) -> List[UserIdentity]:
        client = await self._get_client()
        try:
            users = await client.auth.admin.list_users()
        except Exception as e:
            logger.error("Supabase list_users failed: %s", str(e), exc_info=True)
            raise BackendServiceError(
                context={"operation": "auth.admin.list_users", "error_type": type(e).__name__},
            ) from e
        return [UserIdentity.from_sdk_user(u) for u in users or []]

    # ══════════════════════════════════════════════════════════════════════
    # Pages (owner-scoped)
    # ══════════════════════════════════════════════════════════════════════

    async def get_page(self, page_id: PageId, user_id: str) -> Optional[Page]:
        table = await self._pages()
        query = table.select("*").eq("id", page_id).eq("user_id", user_id).limit(1)
        response = await self._execute(query, "pages.select")
        if not response.data:
            return None
        return Page.model_validate(response.data[0])

    async def list_pages(self, user_id: str) -> List[Page]:
        table = await self._pages()
        query = (
            table.select(_SUMMARY_SELECT)
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
        )
        response = await self._execute(query, "pages.list")
        return [Page.model_validate(row) for row in response.data or []]

    async def insert_page(self, row: Dict[str, Any]) -> Page:
        table = await self._pages()
        response = await self._execute(table.insert(row), "pages.insert")
        if not response.data:
            raise BackendServiceError(
                context={"operation": "pages.insert"},
                details="Insert returned no row",
            )
        return Page.model_validate(response.data[0])

    async def update_page(
        self, page_id: PageId, user_id: str, row: Dict[str, Any]
    ) -> Optional[Page]:
        table = await self._pages()
        query = table.update(row).eq("id", page_id).eq("user_id", user_id)
        response = await self._execute(query, "pages.update")
        if not response.data:
            return None
        return Page.model_validate(response.data[0])

    async def delete_page(self, page_id: PageId, user_id: str) -> int:
        table = await self._pages()
        query = table.delete().eq("id", page_id).eq("user_id", user_id)
        response = await self._execute(query, "pages.delete")
        return len(response.data or [])

    # ══════════════════════════════════════════════════════════════════════
    # Pages (all users)
    # ══════════════════════════════════════════════════════════════════════

    async def count_pages(self, status: Optional[str] = None) -> int:
        table = await self._pages()
        # limit(1) keeps the body tiny; the exact count comes from Content-Range
        query = table.select("id", count="exact")
        if status is not None:
            query = query.eq("status", status)
        response = await self._execute(query.limit(1), "pages.count")
        return response.count or 0

    async def list_recent_pages(self, limit: int) -> List[Page]:
        table = await self._pages()
        query = (
            table.select(_ADMIN_PAGE_SELECT)
            .order("updated_at", desc=True)
            .limit(limit)
        )
        response = await self._execute(query, "pages.recent")
        return [Page.model_validate(row) for row in response.data or []]
