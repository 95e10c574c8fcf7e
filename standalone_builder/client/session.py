"""
Standalone Builder - Client Session State
==========================================

What:  AuthSession holds the signed-in user and the Supabase session for one
       AuthClient. SessionMirror persists a small summary of the user to a
       JSON file so other local tooling can tell who is signed in.

Mirror file format:
    {"id": "<user id>", "email": "me@example.com", "role": "user"}

The mirror never contains tokens.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import aiofiles

from standalone_builder.models import UserIdentity

logger = logging.getLogger(__name__)


class AuthSession:
    """Current user + session of one AuthClient."""

    def __init__(self) -> None:
        self.user: Optional[UserIdentity] = None
        self.raw_session: Any = None

    def update(self, session: Any, user: Any = None) -> None:
        """
        Replace the state from an SDK session (and optionally its user).

        A None session with no user clears everything, which is what the
        SDK reports on sign-out.
        """
        self.raw_session = session
        sdk_user = user if user is not None else getattr(session, "user", None)
        self.user = UserIdentity.from_sdk_user(sdk_user) if sdk_user is not None else None

    def clear(self) -> None:
        self.user = None
        self.raw_session = None

    @property
    def access_token(self) -> Optional[str]:
        return getattr(self.raw_session, "access_token", None) or None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None


class SessionMirror:
    """
    JSON file mirroring the signed-in user.

    A mirror built with `path=None` is disabled and every method is a no-op.
    """

    def __init__(self, path: Optional[Union[str, Path]]):
        self.path: Optional[Path] = Path(path).expanduser() if path else None

    async def save(self, user: UserIdentity) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({"id": user.id, "email": user.email, "role": user.role})
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(payload)

    async def load(self) -> Optional[Dict[str, Any]]:
        if self.path is None or not self.path.exists():
            return None
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session mirror at %s", self.path)
            return None

    async def clear(self) -> None:
        if self.path is None:
            return
        self.path.unlink(missing_ok=True)
