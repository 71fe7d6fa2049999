"""Relevance re-ranking for organization search results."""
from __future__ import annotations

import logging
from typing import List

from .types import NonprofitRecord

logger = logging.getLogger(__name__)

_RANKING_SUFFIXES = (" inc", " corp", " llc", " ltd", " co", " foundation")
_MAIN_ORG_MARKERS = ("usa", "america", "international")


def _search_words(search_term: str) -> List[str]:
    """Words longer than two characters, lowercased."""
    return [w for w in search_term.lower().split() if len(w) > 2]


def _matched_words(search_words: List[str], org_name: str) -> List[str]:
    org_words = org_name.split()
    return [sw for sw in search_words if any(ow in sw or sw in ow for ow in org_words)]


def calculate_relevance_score(search_term: str, record: NonprofitRecord) -> int:
    """Score how well an organization matches a search term; higher is better."""
    search = search_term.lower().strip()
    name = (record.get("name") or "").lower().strip()
    description = (record.get("description") or "").lower()

    if name == search:
        return 1000

    score = 0
    if search and search in name:
        score += 500

    search_words = _search_words(search)
    matched = _matched_words(search_words, name)
    score += 100 * len(matched)
    score += 50 * sum(1 for word in search_words if word in description)

    has_suffix = any(name.endswith(suffix) for suffix in _RANKING_SUFFIXES)
    search_has_suffix = any(suffix.strip() in search for suffix in _RANKING_SUFFIXES)
    if has_suffix and not search_has_suffix:
        score -= 200

    # Likely acronym confusion.
    if len(search) > 20 and len(name) < 20:
        score -= 150

    if search_words and not matched:
        score -= 500

    if "student" not in search and "student chapter" in name:
        score -= 300

    if len(search_words) >= 2 and any(marker in name for marker in _MAIN_ORG_MARKERS):
        score += 50

    return score


def rerank_organizations(records: List[NonprofitRecord], search_term: str) -> List[NonprofitRecord]:
    """Sort by descending relevance; ties keep backend order."""
    if not search_term or not records:
        return list(records)

    scored = [(calculate_relevance_score(search_term, record), record) for record in records]
    scored.sort(key=lambda item: item[0], reverse=True)

    if logger.isEnabledFor(logging.DEBUG):
        for position, (score, record) in enumerate(scored[:3], start=1):
            logger.debug("Rank %d for %r: %s (score %d)", position, search_term, record.get("name"), score)

    return [record for _score, record in scored]


def should_filter_by_search_context(record: NonprofitRecord, search_term: str) -> bool:
    """True for student chapters nobody asked for and names sharing no search word."""
    search = search_term.lower()
    name = (record.get("name") or "").lower()

    if "student" not in search and "student chapter" in name:
        return True

    search_words = _search_words(search)
    if search_words and not _matched_words(search_words, name):
        return True
    return False


def ranking_explanation(record: NonprofitRecord, search_term: str, rank: int) -> str:
    """Human-readable reason an organization ranked where it did."""
    search = search_term.lower()
    name = (record.get("name") or "").lower()

    if name == search:
        return f'Exact match for "{search_term}"'
    if search and search in name:
        return f'Name contains "{search_term}"'

    search_words = _search_words(search)
    matched = [word for word in search_words if word in name]
    if search_words and len(matched) == len(search_words):
        return "Matches all search terms"
    if matched:
        return f"Matches {len(matched)} of {len(search_words)} search terms"
    return f"Ranked #{rank} by relevance"
