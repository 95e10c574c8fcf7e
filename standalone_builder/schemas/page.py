"""
Standalone Builder - Page Schemas
==================================

What:  Request and response models for the page routes.
Who:   Used by routes/pages.py and routes/standalone_pages.py, and by the
       client's PageServiceClient to parse responses.

Envelope convention:
    Success responses wrap data in {"success": true, ...}; the editor keys
    off `success` and reads `page` / `pages` / `message`.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from standalone_builder.models.page import Page, PageStatus


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SavePageRequest(BaseModel):
    """
    Body of POST /api/pages/save.

    With `id`:    update the caller's page with that id
    Without `id`: create a new page

    `title` is optional at the schema level so a missing title produces the
    editor's "Title is required" message from the service instead of a
    generic validation error.
    """
    id: Optional[Union[int, str]] = Field(default=None, description="Existing page id (update)")
    title: Optional[str] = Field(default=None, description="Page title (required)")
    slug: Optional[str] = Field(default=None, description="Derived from title when empty")
    content: Optional[str] = Field(default=None, description="Raw page content")
    content_json: Optional[Any] = Field(default=None, description="Structured page content")
    status: Optional[PageStatus] = Field(default=None, description="draft (default) or published")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PageSummary(BaseModel):
    """List item: the page without its content."""
    id: Union[int, str]
    title: str
    slug: Optional[str] = None
    status: str = PageStatus.DRAFT.value
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PageResponse(BaseModel):
    success: Literal[True] = True
    page: Page


class PageListResponse(BaseModel):
    success: Literal[True] = True
    pages: List[PageSummary] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    success: Literal[True] = True
    message: str = "Page deleted"
