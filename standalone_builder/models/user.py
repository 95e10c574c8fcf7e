"""
Standalone Builder - User Identity
===================================

What:  The part of a Supabase auth user this system reads.
Why:   Users are created by Supabase's sign-up flow and are read-only here;
       the handlers only need the id (for scoping) and, on the admin
       route, email and timestamps.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class UserIdentity(BaseModel):
    id: str = Field(description="Supabase auth user id")
    email: Optional[str] = Field(default=None)
    role: str = Field(default="user", description="user_metadata.role, 'user' when unset")
    created_at: Optional[datetime] = Field(default=None)
    last_sign_in_at: Optional[datetime] = Field(default=None)

    @property
    def is_admin_role(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_sdk_user(cls, user: Any) -> "UserIdentity":
        """
        Build from a supabase-py `User` object (or a dict of the same shape).

        Role metadata lives in `user_metadata`, which users can edit about
        themselves; it is informational only. Admin access on the server is
        decided by the admins table, not by this field.
        """
        if isinstance(user, dict):
            get = user.get
        else:
            def get(name, default=None):
                return getattr(user, name, default)

        metadata = get("user_metadata") or {}
        return cls(
            id=str(get("id")),
            email=get("email"),
            role=metadata.get("role") or "user",
            created_at=get("created_at"),
            last_sign_in_at=get("last_sign_in_at"),
        )
