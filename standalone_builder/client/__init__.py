# Client package init
"""
Standalone Builder - Client Helpers
====================================

What:  The caller-side half of the system: sign-in/session handling against
       Supabase auth, and a typed wrapper over the page routes.

    AuthClient          → wraps the supabase-py client (anon key), owns an
                          AuthSession and a SessionMirror on disk
    PageServiceClient   → calls /api/pages/* with the AuthClient's token
    ServiceResult       → success/error value returned by every network call

Usage:
    auth = (await AuthClient.from_remote_config("https://builder.example.com")).unwrap()
    await auth.login("me@example.com", "secret")
    async with PageServiceClient(auth, base_url="https://builder.example.com") as pages:
        saved = await pages.save_page({"title": "My Page!!"})

There is no module-level session: construct one AuthClient per process and
pass it to whatever needs it.
"""

from standalone_builder.client.auth import AuthClient
from standalone_builder.client.pages import PageServiceClient
from standalone_builder.client.result import ClientError, ServiceResult
from standalone_builder.client.session import AuthSession, SessionMirror

__all__ = [
    "AuthClient",
    "AuthSession",
    "ClientError",
    "PageServiceClient",
    "ServiceResult",
    "SessionMirror",
]
