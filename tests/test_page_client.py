"""
Standalone Builder - Page Service Client Tests
===============================================

What:  PageServiceClient driven against the real ASGI app.
How:   The client's httpx.AsyncClient is test_client from conftest, so each
       call goes through routing, dependencies and FakeBackend.

What we test:
    ✅ Full save → list → get → delete cycle with the session's token
    ✅ Not signed in: list is empty, the rest fail without a request
    ✅ Server {"error": ...} text and status surface on error results
    ✅ Token fallback through check_session()
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from standalone_builder.client import AuthClient, PageServiceClient, SessionMirror
from standalone_builder.schemas.common import ConfigResponse


def signed_in_session(token, user):
    return SimpleNamespace(
        access_token=token,
        user={"id": user.id, "email": user.email, "user_metadata": {}},
    )


@pytest.fixture
def sdk():
    sdk = MagicMock()
    sdk.auth.get_session = AsyncMock(return_value=None)
    return sdk


@pytest.fixture
def auth(sdk):
    config = ConfigResponse(
        supabase_url="https://x.supabase.co",
        supabase_anon_key="anon",
        app_name="Standalone Builder",
        version="1.0.0",
    )
    return AuthClient(config, mirror=SessionMirror(None), sdk=sdk)


@pytest.fixture
def pages(auth, test_client):
    return PageServiceClient(auth, base_url="http://test", http_client=test_client)


class TestSignedIn:

    @pytest.mark.asyncio
    async def test_full_cycle(self, pages, auth, alice):
        auth.session.update(signed_in_session("alice-token", alice))

        saved = await pages.save_page({"title": "My Page!!", "content": "<p>x</p>"})
        assert saved.ok
        assert saved.data.slug == "my-page"

        listed = await pages.list_pages()
        assert [p.id for p in listed.data] == [saved.data.id]

        fetched = await pages.get_page(saved.data.id)
        assert fetched.data.content == "<p>x</p>"

        updated = await pages.save_page({"id": saved.data.id, "title": "Renamed", "status": "published"})
        assert updated.data.status == "published"
        assert updated.data.created_at == saved.data.created_at

        deleted = await pages.delete_page(saved.data.id)
        assert deleted.ok and deleted.data is True

        missing = await pages.get_page(saved.data.id)
        assert not missing.ok
        assert missing.status_code == 404
        assert missing.error == "Page not found"

    @pytest.mark.asyncio
    async def test_server_error_message_is_surfaced(self, pages, auth, alice):
        auth.session.update(signed_in_session("alice-token", alice))

        result = await pages.save_page({"content": "no title"})

        assert not result.ok
        assert result.status_code == 400
        assert result.error == "Title is required"

    @pytest.mark.asyncio
    async def test_invalid_data_is_error_result(self, pages, auth, fake_backend, alice):
        auth.session.update(signed_in_session("alice-token", alice))

        result = await pages.save_page({"title": "x", "status": "archived"})

        assert not result.ok
        assert result.status_code == 400
        assert result.error.startswith("status:")
        assert fake_backend.pages == {}

    @pytest.mark.asyncio
    async def test_expired_token(self, pages, auth, alice):
        auth.session.update(signed_in_session("expired-token", alice))

        result = await pages.list_pages()

        assert not result.ok
        assert result.status_code == 401
        assert result.error == "Invalid or expired token"

    @pytest.mark.asyncio
    async def test_token_from_stored_session(self, pages, sdk, alice):
        sdk.auth.get_session.return_value = signed_in_session("alice-token", alice)

        assert await pages.is_logged_in() is True
        result = await pages.list_pages()

        assert result.ok
        assert result.data == []


class TestSignedOut:

    @pytest.mark.asyncio
    async def test_list_is_empty(self, pages, fake_backend, alice):
        fake_backend.add_page(alice.id, "Someone's page")
        result = await pages.list_pages()
        assert result.ok
        assert result.data == []

    @pytest.mark.asyncio
    async def test_other_operations_fail(self, pages):
        assert await pages.is_logged_in() is False
        assert (await pages.save_page({"title": "x"})).error == "You must be signed in to save pages"
        assert (await pages.get_page("1")).error == "You must be signed in to load pages"
        assert (await pages.delete_page("1")).error == "You must be signed in to delete pages"
