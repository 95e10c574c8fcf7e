"""
Standalone Builder - Page Record
=================================

What:  A row of the `standalone_pages` table as returned by PostgREST.
Who:   Produced by the backend service, returned by the page routes.

Column notes:
    - id:            assigned by Postgres on insert (uuid or bigint)
    - user_id:       owner; every non-admin query filters on it
    - slug:          derived from the title when the editor sends none
    - content:       raw HTML from the editor, "" when absent
    - content_json:  structured editor state, null when absent
    - status:        draft | published
    - created_at:    set once, on insert
    - updated_at:    refreshed by every save
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class PageStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


# Columns returned by list endpoints (content is left out to keep payloads small)
PAGE_SUMMARY_COLUMNS = ("id", "title", "slug", "status", "created_at", "updated_at")


class Page(BaseModel):
    """
    Full page record.

    Extra columns present in the table are passed through untouched so the
    editor sees whatever the schema holds.
    """

    id: Union[int, str] = Field(description="Page identifier")
    user_id: Optional[str] = Field(default=None, description="Owner's user id")
    title: str = Field(description="Page title")
    slug: Optional[str] = Field(default=None, description="URL-safe identifier")
    content: Optional[str] = Field(default=None, description="Raw page content")
    content_json: Optional[Any] = Field(default=None, description="Structured page content")
    status: str = Field(default=PageStatus.DRAFT.value, description="draft or published")
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    model_config = {"extra": "allow"}
