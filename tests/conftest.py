"""
Standalone Builder - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests never talk to a real Supabase project. The HTTP tests swap the
       backend dependency for FakeBackend, an in-memory BackendService.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_backend:        in-memory pages/users/admins
    ├── alice / bob / admin: users registered in fake_backend, with tokens
    ├── test_client:         HTTPX AsyncClient → app, backend overridden
    └── unconfigured_client: HTTPX AsyncClient → app, no backend settings
"""

import os
from typing import Any, Dict, List, Optional

# Override settings for testing BEFORE any app imports
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-role-key"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STANDALONE_SESSION_FILE"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from standalone_builder.config import settings
from standalone_builder.exceptions import BackendServiceError, InvalidTokenError
from standalone_builder.models import PAGE_SUMMARY_COLUMNS, Page, UserIdentity
from standalone_builder.services.backend_base import BackendService, PageId


# ══════════════════════════════════════════════════════════════════════════
# In-memory backend
# ══════════════════════════════════════════════════════════════════════════

class FakeBackend(BackendService):
    """
    BackendService over plain dicts.

    Tokens map to users; pages are keyed by their string id. Add an
    operation name to `failing` ("pages.insert", "pages.list", "admins",
    "stats" ...) to make that call raise BackendServiceError.
    """

    def __init__(self) -> None:
        self.tokens: Dict[str, UserIdentity] = {}
        self.directory: List[UserIdentity] = []
        self.pages: Dict[str, Dict[str, Any]] = {}
        self.admins: set = set()
        self.failing: set = set()
        self._next_id = 1

    def add_user(self, token: str, user_id: str, email: Optional[str] = None,
                 role: str = "user", in_directory: bool = True) -> UserIdentity:
        user = UserIdentity(id=user_id, email=email, role=role)
        self.tokens[token] = user
        if in_directory:
            self.directory.append(user)
        return user

    def add_page(self, user_id: str, title: str, status: str = "draft",
                 updated_at: str = "2024-01-01T00:00:00+00:00", **extra: Any) -> Dict[str, Any]:
        page_id = str(self._next_id)
        self._next_id += 1
        row = {
            "id": page_id,
            "user_id": user_id,
            "title": title,
            "slug": extra.pop("slug", title.lower()),
            "content": extra.pop("content", ""),
            "content_json": extra.pop("content_json", None),
            "status": status,
            "created_at": extra.pop("created_at", updated_at),
            "updated_at": updated_at,
            **extra,
        }
        self.pages[page_id] = row
        return row

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise BackendServiceError(
                context={"operation": operation},
                details=f"{operation} is unavailable",
            )

    def _owned(self, page_id: PageId, user_id: str) -> Optional[Dict[str, Any]]:
        row = self.pages.get(str(page_id))
        if row is not None and row["user_id"] == user_id:
            return row
        return None

    async def get_user(self, token: str) -> UserIdentity:
        self._check("auth")
        if token not in self.tokens:
            raise InvalidTokenError()
        return self.tokens[token]

    async def is_admin(self, user_id: str) -> bool:
        self._check("admins")
        return user_id in self.admins

    async def list_users(self) -> List[UserIdentity]:
        self._check("stats")
        return list(self.directory)

    async def get_page(self, page_id: PageId, user_id: str) -> Optional[Page]:
        self._check("pages.select")
        row = self._owned(page_id, user_id)
        return Page.model_validate(row) if row else None

    async def list_pages(self, user_id: str) -> List[Page]:
        self._check("pages.list")
        rows = [r for r in self.pages.values() if r["user_id"] == user_id]
        rows.sort(key=lambda r: r["updated_at"], reverse=True)
        return [Page.model_validate({k: r[k] for k in PAGE_SUMMARY_COLUMNS}) for r in rows]

    async def insert_page(self, row: Dict[str, Any]) -> Page:
        self._check("pages.insert")
        page_id = str(self._next_id)
        self._next_id += 1
        stored = {"id": page_id, **row}
        self.pages[page_id] = stored
        return Page.model_validate(stored)

    async def update_page(self, page_id: PageId, user_id: str,
                          row: Dict[str, Any]) -> Optional[Page]:
        self._check("pages.update")
        existing = self._owned(page_id, user_id)
        if existing is None:
            return None
        existing.update(row)
        return Page.model_validate(existing)

    async def delete_page(self, page_id: PageId, user_id: str) -> int:
        self._check("pages.delete")
        if self._owned(page_id, user_id) is None:
            return 0
        del self.pages[str(page_id)]
        return 1

    async def count_pages(self, status: Optional[str] = None) -> int:
        self._check("stats")
        return sum(1 for r in self.pages.values() if status is None or r["status"] == status)

    async def list_recent_pages(self, limit: int) -> List[Page]:
        self._check("stats")
        rows = sorted(self.pages.values(), key=lambda r: r["updated_at"], reverse=True)
        columns = PAGE_SUMMARY_COLUMNS + ("user_id",)
        return [Page.model_validate({k: r[k] for k in columns}) for r in rows[:limit]]


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def alice(fake_backend):
    return fake_backend.add_user("alice-token", "user-alice", "alice@example.com")


@pytest.fixture
def bob(fake_backend):
    return fake_backend.add_user("bob-token", "user-bob", "bob@example.com")


@pytest.fixture
def admin(fake_backend):
    user = fake_backend.add_user("admin-token", "user-admin", "admin@example.com", role="admin")
    fake_backend.admins.add(user.id)
    return user


def _bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bearer():
    """Builds an Authorization header: `headers=bearer("alice-token")`."""
    return _bearer


@pytest_asyncio.fixture
async def test_client(fake_backend):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient talking to the FastAPI app in-process.
    How:     ASGITransport + `get_backend_service` overridden with fake_backend.

    Usage:
        async def test_list(test_client, alice):
            response = await test_client.get("/api/pages/list", headers=bearer("alice-token"))
    """
    from standalone_builder.dependencies import get_backend_service
    from standalone_builder.main import app

    app.dependency_overrides[get_backend_service] = lambda: fake_backend
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unconfigured_client(monkeypatch):
    """App with the service role key unset and no backend override."""
    from standalone_builder.main import app

    monkeypatch.setattr(settings, "supabase_service_role_key", None)
    app.dependency_overrides.clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
