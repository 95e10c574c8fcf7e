"""
Standalone Builder - Abstract Backend Service Interface
========================================================

What:  The contract the services rely on for identity resolution and table
       storage.
Why:   Keeps the services independent of the Supabase SDK. Tests plug in an
       in-memory implementation; the app uses SupabaseBackendService.

Scoping rule:
    Every page method that reads or mutates a single page takes the owner's
    `user_id` and MUST filter on it. Only the admin statistics methods
    (count_pages, list_users, list_recent_pages) see all rows.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from standalone_builder.models import Page, UserIdentity

PageId = Union[int, str]


class BackendService(ABC):
    """
    Identity + storage operations used by PageService and AdminService.

    Implementations translate their own failures into
    BackendServiceError (or InvalidTokenError for get_user) so callers only
    ever handle application exceptions.
    """

    # ── Identity ──────────────────────────────────────────────────────────

    @abstractmethod
    async def get_user(self, token: str) -> UserIdentity:
        """
        Resolve a bearer token to the user it belongs to.

        Raises:
            InvalidTokenError:   token unknown, expired or malformed
            BackendServiceError: the identity service could not be reached
        """
        ...

    @abstractmethod
    async def is_admin(self, user_id: str) -> bool:
        """True when the user has a row in the admins table."""
        ...

    @abstractmethod
    async def list_users(self) -> List[UserIdentity]:
        """Full user directory (admin statistics only)."""
        ...

    # ── Pages (owner-scoped) ──────────────────────────────────────────────

    @abstractmethod
    async def get_page(self, page_id: PageId, user_id: str) -> Optional[Page]:
        """The page with `page_id` owned by `user_id`, or None."""
        ...

    @abstractmethod
    async def list_pages(self, user_id: str) -> List[Page]:
        """Summary columns of the user's pages, newest `updated_at` first."""
        ...

    @abstractmethod
    async def insert_page(self, row: Dict[str, Any]) -> Page:
        """Insert a row and return it as stored."""
        ...

    @abstractmethod
    async def update_page(
        self, page_id: PageId, user_id: str, row: Dict[str, Any]
    ) -> Optional[Page]:
        """Update the owned page; None when no owned row matched."""
        ...

    @abstractmethod
    async def delete_page(self, page_id: PageId, user_id: str) -> int:
        """Delete the owned page; returns the number of rows removed (0 is fine)."""
        ...

    # ── Pages (all users, admin statistics) ───────────────────────────────

    @abstractmethod
    async def count_pages(self, status: Optional[str] = None) -> int:
        ...

    @abstractmethod
    async def list_recent_pages(self, limit: int) -> List[Page]:
        """Summary columns plus user_id, newest `updated_at` first."""
        ...
