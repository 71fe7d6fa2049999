"""Shared type declarations for wire payloads and collaborator results."""
from __future__ import annotations

from typing import Any, List, Literal, NotRequired, Protocol, TypedDict, Union


class ChatHistoryEntry(TypedDict):
    """One retained exchange half sent back to the reasoning backend."""

    role: Literal["user", "model"]
    content: str


class SourceCitation(TypedDict):
    title: str
    url: str


class ChatClassification(TypedDict):
    cause: str
    geoName: str
    severity: str
    identified_needs: List[str]
    affectedGroups: List[str]


class ChatCharity(TypedDict):
    name: str
    description: str
    trustScore: int


class ChatContext(TypedDict):
    """Article and matching context attached to every chat request."""

    articleTitle: str
    articleText: str
    articleSummary: str
    articleUrl: NotRequired[str]
    classification: ChatClassification
    matchedCharities: List[ChatCharity]


class ChatRequest(TypedDict):
    message: str
    context: ChatContext
    history: List[ChatHistoryEntry]
    enableWebSearch: bool


class ChatResponse(TypedDict):
    message: str
    suggestions: NotRequired[List[str]]
    sources: NotRequired[List[SourceCitation]]


class ChatSuccess(TypedDict):
    success: Literal[True]
    data: ChatResponse


class ChatFailure(TypedDict):
    success: Literal[False]
    error: str


ChatResult = Union[ChatSuccess, ChatFailure]


class ApiSuccess(TypedDict):
    success: Literal[True]
    data: Any


class ApiFailure(TypedDict):
    success: Literal[False]
    error: str


ApiResult = Union[ApiSuccess, ApiFailure]


class OrganizationApiResponse(TypedDict, total=False):
    """Organization record as returned by the search backend."""

    nonprofitId: str
    slug: str
    name: str
    description: str
    logoUrl: str
    coverImageUrl: str
    websiteUrl: str
    ein: str
    location: str
    locationAddress: str
    primaryCategory: str
    categories: List[str]
    nteeCode: str
    nteeCodeMeaning: str


class NonprofitRecord(TypedDict, total=False):
    """Normalized nonprofit shape used for filtering and ranking."""

    slug: str
    name: str
    description: str
    logoUrl: str
    coverImageUrl: str
    websiteUrl: str
    ein: str
    locationAddress: str
    primaryCategory: str
    nteeCode: str
    nteeCodeMeaning: str


class ReasoningClient(Protocol):
    """Anything that can answer one chat turn with a result value."""

    async def send_message(self, request: ChatRequest) -> ChatResult:
        ...


class OrganizationSearchBackend(Protocol):
    async def search_organizations(self, search_term: str | None = None) -> ApiResult:
        ...

    async def get_organization_by_slug(self, slug: str) -> ApiResult:
        ...
