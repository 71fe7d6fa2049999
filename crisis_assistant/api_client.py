"""HTTP client for the organization search backend."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .types import ApiResult

logger = logging.getLogger(__name__)


class OrganizationApiClient:
    """Thin async wrapper over the ``/organizations`` endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> ApiResult:
        url = f"{self.base_url}{endpoint}"
        try:
            response = await self._client.get(url, params=params)
            data: Any = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Organization API request to %s failed: %s", url, exc)
            return {"success": False, "error": str(exc) or "Network error"}

        if not response.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            return {"success": False, "error": error or f"HTTP error! status: {response.status_code}"}
        return {"success": True, "data": data}

    async def search_organizations(self, search_term: Optional[str] = None) -> ApiResult:
        params = {"q": search_term} if search_term else None
        return await self._request("/organizations/search", params=params)

    async def get_organization_by_slug(self, slug: str) -> ApiResult:
        return await self._request(f"/organizations/{quote(slug, safe='')}")
