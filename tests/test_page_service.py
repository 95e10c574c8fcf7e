"""
Standalone Builder - Page Service Unit Tests
=============================================

What:  Tests for PageService business logic against the in-memory backend.
How:   A fixed clock makes timestamps predictable; no HTTP involved.

What we test:
    ✅ Create stamps created_at and updated_at; update refreshes only updated_at
    ✅ Defaults: content "", content_json null, status draft, derived slug
    ✅ Every operation is scoped to the caller
    ✅ Backend failures carry the public message (and details on save)
"""

from datetime import datetime, timedelta, timezone

import pytest

from standalone_builder.exceptions import BackendServiceError, NotFoundError, ValidationError
from standalone_builder.schemas.page import SavePageRequest
from standalone_builder.services.page_service import PageService


class Clock:
    def __init__(self):
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class TestPageServiceSave:

    def setup_method(self):
        self.clock = Clock()
        self.service = PageService(clock=self.clock)

    @pytest.mark.asyncio
    async def test_create_sets_defaults_and_timestamps(self, fake_backend, alice):
        page = await self.service.save_page(
            fake_backend, alice, SavePageRequest(title="My Page!!")
        )

        assert page.user_id == alice.id
        assert page.slug == "my-page"
        assert page.content == ""
        assert page.content_json is None
        assert page.status == "draft"
        assert page.created_at == self.clock.now
        assert page.updated_at == self.clock.now

    @pytest.mark.asyncio
    async def test_update_refreshes_updated_at_only(self, fake_backend, alice):
        created = await self.service.save_page(
            fake_backend, alice, SavePageRequest(title="Draft", content="<p>v1</p>")
        )
        self.clock.advance(minutes=5)

        updated = await self.service.save_page(
            fake_backend,
            alice,
            SavePageRequest(id=created.id, title="Final", content="<p>v2</p>", status="published"),
        )

        assert updated.id == created.id
        assert updated.title == "Final"
        assert updated.slug == "final"
        assert updated.status == "published"
        assert updated.created_at == created.created_at
        assert updated.updated_at == self.clock.now
        assert updated.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_explicit_slug_is_stored(self, fake_backend, alice):
        page = await self.service.save_page(
            fake_backend, alice, SavePageRequest(title="Anything", slug="landing")
        )
        assert page.slug == "landing"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("falsy_id", [0, ""])
    async def test_falsy_id_creates(self, fake_backend, alice, falsy_id):
        existing = fake_backend.add_page(alice.id, "Existing")

        page = await self.service.save_page(
            fake_backend, alice, SavePageRequest(id=falsy_id, title="Fresh")
        )

        assert page.id != existing["id"]
        assert page.created_at == self.clock.now
        assert len(fake_backend.pages) == 2

    @pytest.mark.asyncio
    async def test_missing_title_rejected(self, fake_backend, alice):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.save_page(fake_backend, alice, SavePageRequest(title=""))
        assert exc_info.value.message == "Title is required"
        assert fake_backend.pages == {}

    @pytest.mark.asyncio
    async def test_update_of_foreign_page_is_not_found(self, fake_backend, alice, bob):
        row = fake_backend.add_page(bob.id, "Bob's page")

        with pytest.raises(NotFoundError):
            await self.service.save_page(
                fake_backend, alice, SavePageRequest(id=row["id"], title="Hijacked")
            )
        assert fake_backend.pages[row["id"]]["title"] == "Bob's page"

    @pytest.mark.asyncio
    async def test_insert_failure_reports_details(self, fake_backend, alice):
        fake_backend.failing.add("pages.insert")

        with pytest.raises(BackendServiceError) as exc_info:
            await self.service.save_page(fake_backend, alice, SavePageRequest(title="X"))

        assert exc_info.value.message == "Failed to create page"
        assert exc_info.value.details == "pages.insert is unavailable"

    @pytest.mark.asyncio
    async def test_update_failure_reports_details(self, fake_backend, alice):
        row = fake_backend.add_page(alice.id, "Mine")
        fake_backend.failing.add("pages.update")

        with pytest.raises(BackendServiceError) as exc_info:
            await self.service.save_page(
                fake_backend, alice, SavePageRequest(id=row["id"], title="Mine")
            )

        assert exc_info.value.message == "Failed to update page"
        assert exc_info.value.details == "pages.update is unavailable"


class TestPageServiceRead:

    def setup_method(self):
        self.service = PageService()

    @pytest.mark.asyncio
    async def test_list_is_scoped_and_newest_first(self, fake_backend, alice, bob):
        fake_backend.add_page(alice.id, "Old", updated_at="2024-01-01T00:00:00+00:00")
        fake_backend.add_page(alice.id, "New", updated_at="2024-03-01T00:00:00+00:00")
        fake_backend.add_page(bob.id, "Bob's", updated_at="2024-02-01T00:00:00+00:00")

        pages = await self.service.list_pages(fake_backend, alice)

        assert [p.title for p in pages] == ["New", "Old"]
        assert not hasattr(pages[0], "content")

    @pytest.mark.asyncio
    async def test_list_failure(self, fake_backend, alice):
        fake_backend.failing.add("pages.list")
        with pytest.raises(BackendServiceError) as exc_info:
            await self.service.list_pages(fake_backend, alice)
        assert exc_info.value.message == "Failed to fetch pages"

    @pytest.mark.asyncio
    async def test_get_own_page(self, fake_backend, alice):
        row = fake_backend.add_page(alice.id, "Mine", content="<h1>hi</h1>")
        page = await self.service.get_page(fake_backend, alice, row["id"])
        assert page.content == "<h1>hi</h1>"

    @pytest.mark.asyncio
    async def test_get_foreign_page_is_not_found(self, fake_backend, alice, bob):
        row = fake_backend.add_page(bob.id, "Bob's")
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_page(fake_backend, alice, row["id"])
        assert exc_info.value.message == "Page not found"

    @pytest.mark.asyncio
    async def test_get_backend_error_is_not_found(self, fake_backend, alice):
        fake_backend.failing.add("pages.select")
        with pytest.raises(NotFoundError):
            await self.service.get_page(fake_backend, alice, "not-a-uuid")


class TestPageServiceDelete:

    def setup_method(self):
        self.service = PageService()

    @pytest.mark.asyncio
    async def test_delete_own_page(self, fake_backend, alice):
        row = fake_backend.add_page(alice.id, "Mine")
        await self.service.delete_page(fake_backend, alice, row["id"])
        assert row["id"] not in fake_backend.pages

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, fake_backend, alice):
        row = fake_backend.add_page(alice.id, "Mine")
        await self.service.delete_page(fake_backend, alice, row["id"])
        await self.service.delete_page(fake_backend, alice, row["id"])
        await self.service.delete_page(fake_backend, alice, "999")

    @pytest.mark.asyncio
    async def test_delete_foreign_page_is_silent_noop(self, fake_backend, alice, bob):
        row = fake_backend.add_page(bob.id, "Bob's")
        await self.service.delete_page(fake_backend, alice, row["id"])
        assert row["id"] in fake_backend.pages

    @pytest.mark.asyncio
    async def test_delete_failure(self, fake_backend, alice):
        fake_backend.failing.add("pages.delete")
        with pytest.raises(BackendServiceError) as exc_info:
            await self.service.delete_page(fake_backend, alice, "1")
        assert exc_info.value.message == "Failed to delete page"
