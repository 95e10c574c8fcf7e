"""
Standalone Builder - Page Service Client
=========================================

What:  Async wrapper over the page routes for callers holding an AuthClient.
How:   httpx.AsyncClient; every request carries `Authorization: Bearer
       <access token>` and every method returns a ServiceResult whose error
       is the server's `{"error": ...}` text.

Not signed in:
    save/get/delete  → failure("You must be signed in ...") without a request
    list             → success([]) without a request
"""

import logging
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from standalone_builder.client.auth import AuthClient
from standalone_builder.client.config import client_settings
from standalone_builder.client.result import ServiceResult
from standalone_builder.models import Page
from standalone_builder.schemas.page import PageSummary, SavePageRequest
from standalone_builder.services.backend_base import PageId

logger = logging.getLogger(__name__)

NOT_SIGNED_IN = "You must be signed in to {action}"


class PageServiceClient:
    def __init__(
        self,
        auth: AuthClient,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.auth = auth
        self.base_url = (base_url if base_url is not None else client_settings.api_base_url).rstrip("/")
        self._http = http_client
        self._owns_http = http_client is None

    async def __aenter__(self) -> "PageServiceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http

    # ══════════════════════════════════════════════════════════════════════
    # Token
    # ══════════════════════════════════════════════════════════════════════

    async def get_token(self) -> Optional[str]:
        """Current access token, asking the SDK for a stored session if needed."""
        token = self.auth.get_token()
        if token:
            return token

        result = await self.auth.check_session()
        if not result.ok:
            logger.warning("Could not get session: %s", result.error)
            return None
        return self.auth.get_token()

    async def is_logged_in(self) -> bool:
        return await self.get_token() is not None

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        fallback_error: str,
        **kwargs: Any,
    ) -> ServiceResult[Dict[str, Any]]:
        try:
            response = await self._client().request(
                method,
                f"{self.base_url}{path}",
                headers={"Authorization": f"Bearer {token}"},
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, str(e))
            return ServiceResult.failure(str(e) or fallback_error)

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.is_success:
            error = data.get("error") or fallback_error
            logger.warning("%s %s → %d: %s", method, path, response.status_code, error)
            return ServiceResult.failure(error, status_code=response.status_code)
        return ServiceResult.success(data, status_code=response.status_code)

    @staticmethod
    def _page_path(page_id: PageId) -> str:
        return f"/api/pages/{quote(str(page_id), safe='')}"

    # ══════════════════════════════════════════════════════════════════════
    # Operations
    # ══════════════════════════════════════════════════════════════════════

    async def save_page(
        self, page: Union[SavePageRequest, Dict[str, Any]]
    ) -> ServiceResult[Page]:
        """Create (no id) or update (with id) a page."""
        token = await self.get_token()
        if not token:
            return ServiceResult.failure(NOT_SIGNED_IN.format(action="save pages"))

        try:
            request = page if isinstance(page, SavePageRequest) else SavePageRequest.model_validate(page)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
            logger.warning("Page not sent, invalid data: %s", message)
            return ServiceResult.failure(message, status_code=400)

        result = await self._request(
            "POST",
            "/api/pages/save",
            token,
            "Save failed",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        if not result.ok:
            return ServiceResult.failure(result.error, result.status_code)
        return ServiceResult.success(Page.model_validate(result.data["page"]), result.status_code)

    async def list_pages(self) -> ServiceResult[List[PageSummary]]:
        token = await self.get_token()
        if not token:
            return ServiceResult.success([])

        result = await self._request("GET", "/api/pages/list", token, "Failed to fetch pages")
        if not result.ok:
            return ServiceResult.failure(result.error, result.status_code)
        pages = [PageSummary.model_validate(p) for p in result.data.get("pages") or []]
        return ServiceResult.success(pages, result.status_code)

    async def get_page(self, page_id: PageId) -> ServiceResult[Page]:
        token = await self.get_token()
        if not token:
            return ServiceResult.failure(NOT_SIGNED_IN.format(action="load pages"))

        result = await self._request("GET", self._page_path(page_id), token, "Page not found")
        if not result.ok:
            return ServiceResult.failure(result.error, result.status_code)
        return ServiceResult.success(Page.model_validate(result.data["page"]), result.status_code)

    async def delete_page(self, page_id: PageId) -> ServiceResult[bool]:
        token = await self.get_token()
        if not token:
            return ServiceResult.failure(NOT_SIGNED_IN.format(action="delete pages"))

        result = await self._request("DELETE", self._page_path(page_id), token, "Delete failed")
        if not result.ok:
            return ServiceResult.failure(result.error, result.status_code)
        return ServiceResult.success(True, result.status_code)
