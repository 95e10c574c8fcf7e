"""
Standalone Builder - Auth Client
=================================

What:  Sign-in, sign-up, sign-out, password reset and session tracking
       against Supabase auth, using the public (anon) key.
Why:   The page routes expect a Supabase access token as bearer credential;
       this is where the token comes from.
How:   The SDK client is created lazily by `init()` from the values served
       by GET /api/config. Session state lives on the instance (AuthSession)
       and a summary of the signed-in user is mirrored to disk.

Lifecycle:
    from_remote_config() ──► init() ──► check_session() / login()
                                             │
                           get_token() ◄─────┘ ... logout()

Every method that talks to Supabase returns a ServiceResult; auth API errors
are logged and come back as error results.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx
from supabase import AsyncClient, AuthError, acreate_client

from standalone_builder.client.config import client_settings
from standalone_builder.client.result import ServiceResult
from standalone_builder.client.session import AuthSession, SessionMirror
from standalone_builder.models import UserIdentity
from standalone_builder.schemas.common import ConfigResponse

logger = logging.getLogger(__name__)

RESET_PASSWORD_PAGE = "/reset-password.html"


def _error_text(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc) or type(exc).__name__


class AuthClient:
    def __init__(
        self,
        config: ConfigResponse,
        session: Optional[AuthSession] = None,
        mirror: Optional[SessionMirror] = None,
        sdk: Optional[AsyncClient] = None,
        site_url: Optional[str] = None,
    ):
        self.config = config
        self.session = session or AuthSession()
        self.mirror = mirror if mirror is not None else SessionMirror(client_settings.session_file)
        self.site_url = site_url if site_url is not None else client_settings.site_url
        self._sdk = sdk

    @classmethod
    async def from_remote_config(
        cls,
        api_base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **kwargs: Any,
    ) -> "ServiceResult[AuthClient]":
        """Fetch GET /api/config from the handlers and build a client from it."""
        base_url = (api_base_url or client_settings.api_base_url).rstrip("/")
        owns_client = http_client is None
        http = http_client or httpx.AsyncClient()
        try:
            response = await http.get(f"{base_url}/api/config")
            response.raise_for_status()
            config = ConfigResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Could not load client config from %s: %s", base_url, str(e))
            return ServiceResult.failure(f"Could not load configuration: {_error_text(e)}")
        finally:
            if owns_client:
                await http.aclose()

        return ServiceResult.success(cls(config, **kwargs))

    @property
    def initialized(self) -> bool:
        return self._sdk is not None

    async def init(self) -> ServiceResult[bool]:
        """Create the SDK client once; later calls are no-ops."""
        if self._sdk is not None:
            return ServiceResult.success(True)

        if not self.config.supabase_url or not self.config.supabase_anon_key:
            logger.error("Supabase is not configured: SUPABASE_URL/SUPABASE_ANON_KEY missing")
            return ServiceResult.failure("Supabase is not configured")

        try:
            self._sdk = await acreate_client(
                self.config.supabase_url, self.config.supabase_anon_key
            )
        except Exception as e:
            logger.error("Supabase client init failed: %s", str(e))
            return ServiceResult.failure(_error_text(e))

        logger.info("Supabase client initialized")
        return ServiceResult.success(True)

    # ══════════════════════════════════════════════════════════════════════
    # Session
    # ══════════════════════════════════════════════════════════════════════

    async def check_session(self) -> ServiceResult[Optional[UserIdentity]]:
        """
        Load an existing session from the SDK; data is None when signed out.

        The mirror file follows the SDK: rewritten for a live session, removed
        when the SDK has none but a previous run left one behind.
        """
        ready = await self.init()
        if not ready.ok:
            return ServiceResult.failure(ready.error)

        try:
            session = await self._sdk.auth.get_session()
        except AuthError as e:
            logger.error("Session check failed: %s", e.message)
            return ServiceResult.failure(e.message)

        if session:
            self.session.update(session)
            if self.session.user is not None:
                await self.mirror.save(self.session.user)
            logger.info("Session found for %s", self.session.user.email if self.session.user else "?")
        else:
            stale = await self.mirror.load()
            if stale is not None:
                logger.info("No session; removing stale mirror for %s", stale.get("email"))
                await self.mirror.clear()
        return ServiceResult.success(self.session.user)

    def get_user(self) -> Optional[UserIdentity]:
        return self.session.user

    def get_token(self) -> Optional[str]:
        return self.session.access_token

    def is_admin(self) -> bool:
        """Role from user metadata; informational, the server checks its admins table."""
        return bool(self.session.user and self.session.user.is_admin_role)

    async def on_auth_state_change(
        self, callback: Optional[Callable[[str, Optional[UserIdentity]], None]] = None
    ) -> Any:
        """
        Keep the session in sync with SDK auth events.

        Builds the SDK client first if needed. Returns the SDK subscription,
        or None when the client cannot be built (Supabase not configured).
        """
        ready = await self.init()
        if not ready.ok:
            logger.warning("Cannot subscribe to auth changes: %s", ready.error)
            return None

        def _listener(event: Any, session: Any) -> None:
            logger.info("Auth state change: %s", event)
            if session is None:
                self.session.clear()
            else:
                self.session.update(session)
            if callback is not None:
                callback(event, self.session.user)

        return self._sdk.auth.on_auth_state_change(_listener)

    # ══════════════════════════════════════════════════════════════════════
    # Account operations
    # ══════════════════════════════════════════════════════════════════════

    async def login(self, email: str, password: str) -> ServiceResult[UserIdentity]:
        ready = await self.init()
        if not ready.ok:
            return ServiceResult.failure(ready.error)

        try:
            response = await self._sdk.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            logger.error("Login error: %s", e.message)
            return ServiceResult.failure(e.message, status_code=getattr(e, "status", None))

        self.session.update(response.session, response.user)
        if self.session.user is not None:
            await self.mirror.save(self.session.user)
        logger.info("Login successful: %s", email)
        return ServiceResult.success(self.session.user)

    async def register(
        self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None
    ) -> ServiceResult[Optional[UserIdentity]]:
        """
        Sign up a new account; `metadata` becomes the user's user_metadata.

        Does not sign in. With email confirmation enabled the new user has
        no session until the address is confirmed.
        """
        ready = await self.init()
        if not ready.ok:
            return ServiceResult.failure(ready.error)

        try:
            response = await self._sdk.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata or {}}}
            )
        except AuthError as e:
            logger.error("Registration error: %s", e.message)
            return ServiceResult.failure(e.message, status_code=getattr(e, "status", None))

        logger.info("Registration successful: %s", email)
        user = UserIdentity.from_sdk_user(response.user) if response.user else None
        return ServiceResult.success(user)

    async def logout(self) -> ServiceResult[bool]:
        if self._sdk is None:
            self.session.clear()
            await self.mirror.clear()
            return ServiceResult.success(True)

        try:
            await self._sdk.auth.sign_out()
        except AuthError as e:
            logger.error("Logout error: %s", e.message)
            return ServiceResult.failure(e.message)

        self.session.clear()
        await self.mirror.clear()
        logger.info("Logged out")
        return ServiceResult.success(True)

    async def reset_password(
        self, email: str, redirect_to: Optional[str] = None
    ) -> ServiceResult[bool]:
        """Send a reset email; the link lands on <site_url>/reset-password.html by default."""
        ready = await self.init()
        if not ready.ok:
            return ServiceResult.failure(ready.error)

        options: Dict[str, Any] = {}
        target = redirect_to or (
            f"{self.site_url.rstrip('/')}{RESET_PASSWORD_PAGE}" if self.site_url else None
        )
        if target:
            options["redirect_to"] = target

        try:
            await self._sdk.auth.reset_password_for_email(email, options)
        except AuthError as e:
            logger.error("Password reset error: %s", e.message)
            return ServiceResult.failure(e.message)

        logger.info("Password reset email requested for %s", email)
        return ServiceResult.success(True)
