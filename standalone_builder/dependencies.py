"""
Standalone Builder - Request Dependencies
==========================================

What:  The credential-forwarding chain shared by every authenticated route.
How:   FastAPI dependencies, resolved in the order the route declares them:

           [page id]  →  bearer token  →  backend (config)  →  user
             400            401              500                401

       The page-id check only exists on the query-string routes. Token
       extraction runs before the configuration check, so a request with no
       credentials gets 401 even on a misconfigured server.

Why dependencies (not middleware):
    Each route declares exactly what it needs, FastAPI caches each
    dependency per request, and tests can swap the backend with
    `app.dependency_overrides[get_backend_service]`.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, Query, Request

from standalone_builder.config import settings
from standalone_builder.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ValidationError,
)
from standalone_builder.models import UserIdentity
from standalone_builder.services.backend_base import BackendService
from standalone_builder.services.supabase_service import SupabaseBackendService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_bearer_token(
    authorization: Optional[str] = Header(default=None),
) -> str:
    """
    Extract the token from `Authorization: Bearer <token>`.

    The scheme is matched case-sensitively, as the browser sends it.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError()

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError()
    return token


@lru_cache(maxsize=4)
def _backend_for(url: str, service_key: str) -> SupabaseBackendService:
    # One client per (url, key); rebuilt only if the settings change
    return SupabaseBackendService(url=url, service_key=service_key)


def get_backend_service() -> BackendService:
    """Privileged backend, or 500 when the server settings are missing."""
    if not settings.backend_configured:
        logger.error(
            "Missing Supabase configuration: SUPABASE_URL and "
            "SUPABASE_SERVICE_ROLE_KEY must both be set"
        )
        raise ConfigurationError()
    return _backend_for(settings.supabase_url, settings.supabase_service_role_key)


async def get_current_user(
    request: Request,
    token: str = Depends(get_bearer_token),
    backend: BackendService = Depends(get_backend_service),
) -> UserIdentity:
    """Resolve the bearer token to a user; InvalidTokenError (401) otherwise."""
    user = await backend.get_user(token)
    # Picked up by the access log
    request.state.user_id = user.id
    logger.debug("Authenticated user %s", user.id)
    return user


def require_page_id(
    page_id: Optional[str] = Query(default=None, alias="id", description="Page ID"),
) -> str:
    """`?id=` for the query-string routes; 400 when absent or empty."""
    if not page_id:
        raise ValidationError(message="Page ID is required", field="id")
    return page_id
