"""
Standalone Builder - Admin Schemas
===================================

What:  Payload of GET /api/admin/stats.
Why camelCase aliases: the admin dashboard reads `usersList` / `pagesList`;
       Python attributes stay snake_case and FastAPI serializes by alias.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class AdminUserSummary(BaseModel):
    id: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None
    page_count: int = 0


class AdminPageSummary(BaseModel):
    id: Union[int, str]
    title: str
    slug: Optional[str] = None
    status: str
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user_email: str


class AdminStatsResponse(BaseModel):
    """
    Aggregate view over all users and pages.

    Fields:
        users:      size of the user directory
        pages:      count of all pages
        published:  count of published pages
        drafts:     count of draft pages
        usersList:  every user with the number of their pages in pagesList
        pagesList:  most recently updated pages across all users
    """
    users: int = 0
    pages: int = 0
    published: int = 0
    drafts: int = 0
    users_list: List[AdminUserSummary] = Field(default_factory=list, alias="usersList")
    pages_list: List[AdminPageSummary] = Field(default_factory=list, alias="pagesList")

    model_config = {"populate_by_name": True}
