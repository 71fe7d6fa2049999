"""Domain records shared by the conversation and organization layers."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

from .types import SourceCitation

Role = Literal["user", "agent"]


def generate_message_id() -> str:
    return f"msg_{uuid.uuid4().hex}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """One turn in the user-visible transcript."""

    role: Role
    content: str
    quick_replies: Tuple[str, ...] = ()
    sources: Tuple[SourceCitation, ...] = ()
    id: str = field(default_factory=generate_message_id)
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass
class Charity:
    """Display shape for an organization, whatever its provenance."""

    id: str
    name: str
    slug: str
    description: str
    trust_score: int
    logo: str = "/placeholder.svg"
    cover_image_url: Optional[str] = None
    website_url: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    causes: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    addressed_needs: List[str] = field(default_factory=list)
    ein: Optional[str] = None
    ntee_code: Optional[str] = None
    is_active: bool = True
    verified: bool = False
    vetting_level: str = "partner_pg_review"
    geographic_flexibility: int = 5
    data_source: str = "curated"


@dataclass
class Classification:
    """Crisis classification produced upstream of the assistant."""

    cause: str
    geo_name: str
    severity: str = "unknown"
    affected_groups: List[str] = field(default_factory=list)
    identified_needs: List[str] = field(default_factory=list)
    article_title: Optional[str] = None
    article_text: Optional[str] = None
    article_url: Optional[str] = None


@dataclass
class ConversationContext:
    """Session-scoped context a conversation is grounded on."""

    classification: Classification
    matched_charities: List[Charity] = field(default_factory=list)
    article_summary: str = ""
    article_text: Optional[str] = None
    article_title: Optional[str] = None
    article_url: Optional[str] = None
