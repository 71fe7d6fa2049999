"""Organization retrieval with per-term memoization and offline fallback."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .fallback_data import FALLBACK_CHARITIES, find_by_slug
from .mapper import is_irrelevant_organization, map_nonprofit_to_charity, normalize_api_record
from .models import Charity
from .ranking import rerank_organizations, should_filter_by_search_context
from .types import NonprofitRecord, OrganizationSearchBackend

logger = logging.getLogger(__name__)

ALL_KEY = "all"
_TERM_PREFIX = "q:"


def normalize_search_term(search_term: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; blank terms count as no term."""
    term = (search_term or "").strip()
    return term or None


def cache_key(search_term: Optional[str]) -> str:
    """Case-insensitive key per term; terms never share a key with the no-term listing."""
    term = normalize_search_term(search_term)
    if term is None:
        return ALL_KEY
    return f"{_TERM_PREFIX}{term.casefold()}"


def _extract_organizations(data: Any) -> List[Dict[str, Any]]:
    """Accept either a bare list or ``{"organizations": [...]}``."""
    orgs = data
    if isinstance(data, dict):
        orgs = data.get("organizations")
    if not isinstance(orgs, list):
        raise ValueError("Malformed organization search response")
    if not all(isinstance(org, dict) for org in orgs):
        raise ValueError("Malformed organization record in search response")
    return orgs


class OrganizationRepository:
    """Fetches, filters, ranks and caches organizations for search terms.

    Each distinct search key is fetched from the backend at most once while a
    successful result is cached; failures fall back to the bundled dataset
    and leave the cache untouched. Concurrent misses on one key are not
    coalesced, the last completion wins.
    """

    def __init__(
        self,
        backend: OrganizationSearchBackend,
        fallback: Sequence[Charity] = FALLBACK_CHARITIES,
    ) -> None:
        self.backend = backend
        self.fallback: Tuple[Charity, ...] = tuple(fallback)
        self._cache: Dict[str, Tuple[Charity, ...]] = {}
        self._pending = 0
        self.organizations: List[Charity] = []
        self.error: Optional[str] = None

    @property
    def loading(self) -> bool:
        """True while any backend call on this repository is outstanding."""
        return self._pending > 0

    def cached_keys(self) -> List[str]:
        return list(self._cache)

    def _rank(self, records: List[NonprofitRecord], search_term: Optional[str]) -> List[Charity]:
        kept = [record for record in records if not is_irrelevant_organization(record, search_term)]
        if search_term:
            kept = [record for record in kept if not should_filter_by_search_context(record, search_term)]
            kept = rerank_organizations(kept, search_term)
        return [map_nonprofit_to_charity(record) for record in kept]

    async def fetch(self, search_term: Optional[str] = None) -> List[Charity]:
        """Return organizations for a term, from cache when possible."""
        term = normalize_search_term(search_term)
        key = cache_key(term)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Organization cache hit for %r", key)
            self.error = None
            self.organizations = list(cached)
            return list(cached)

        self._pending += 1
        self.error = None
        try:
            response = await self.backend.search_organizations(term)
            if not response["success"]:
                raise RuntimeError(response["error"] or "Failed to fetch organizations")

            raw_orgs = _extract_organizations(response["data"])
            records = [normalize_api_record(org) for org in raw_orgs]
            ranked = self._rank(records, term)
            logger.info("Fetched %d organizations for %r (%d kept)", len(raw_orgs), key, len(ranked))

            self._cache[key] = tuple(ranked)
            self.organizations = ranked
            return list(ranked)
        except Exception as exc:
            self.error = str(exc) or "Failed to fetch organizations"
            logger.warning("Organization fetch for %r failed, using fallback data: %s", key, self.error)
            self.organizations = list(self.fallback)
            return list(self.fallback)
        finally:
            self._pending -= 1

    async def refetch(self, search_term: Optional[str] = None) -> List[Charity]:
        """Drop any cached entry for the term and fetch again."""
        self._cache.pop(cache_key(search_term), None)
        return await self.fetch(search_term)

    async def fetch_one(self, slug: str) -> Optional[Charity]:
        """Look up a single organization, falling back to the bundled dataset."""
        self._pending += 1
        self.error = None
        try:
            response = await self.backend.get_organization_by_slug(slug)
            if not response["success"]:
                raise RuntimeError(response["error"] or "Organization not found")

            data = response["data"]
            if isinstance(data, dict) and isinstance(data.get("organization"), dict):
                data = data["organization"]
            if not isinstance(data, dict) or not data.get("slug"):
                raise ValueError("Malformed organization response")
            return map_nonprofit_to_charity(normalize_api_record(data))
        except Exception as exc:
            self.error = str(exc) or "Failed to fetch organization"
            logger.warning("Organization lookup for %r failed: %s", slug, self.error)
            return find_by_slug(slug, self.fallback)
        finally:
            self._pending -= 1
