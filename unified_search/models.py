"""Pydantic models for the unified search API."""

from typing import Any, Literal

from pydantic import BaseModel, Field

SourceName = Literal["zendesk", "docs", "knowledge_base"]

ZENDESK = "zendesk"
DOCS = "docs"
KNOWLEDGE_BASE = "knowledge_base"

# Fixed dispatch order; also the tie-break order for equal final scores
ALL_SOURCES: tuple[str, ...] = (ZENDESK, DOCS, KNOWLEDGE_BASE)

API_VERSION = "unified_v1"


class SearchResult(BaseModel):
    """A single result in the unified schema every source adapter produces."""

    id: str = Field(description="Source-prefixed identifier, e.g. zendesk_123")
    title: str = Field(min_length=1)
    url: str = ""
    snippet: str = ""
    content: str = ""
    score: float = Field(default=0.0, ge=0)
    source: str
    category: str | None = None
    section: str | None = None
    last_updated: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchRequest(BaseModel):
    """Body of POST /api/search/unified."""

    query: str
    limit: int = 10
    filters: dict[str, Any] = Field(default_factory=dict)
    # Entries that are not known source tags, of any type, are ignored
    sources: list[Any] = Field(default_factory=lambda: list(ALL_SOURCES))
    # Accepted for forward compatibility; neither changes the response today
    include_snippets: bool = True
    sort_by: str = "relevance"

    @property
    def enabled_sources(self) -> list[str]:
        """Known sources requested, in fixed dispatch order."""
        return [name for name in ALL_SOURCES if name in self.sources]


class SearchResponse(BaseModel):
    success: bool = True
    results: list[SearchResult]
    total: int
    returned: int
    query: str
    sources: list[str]
    timestamp: str
    api_version: str = API_VERSION


class ClientErrorResponse(BaseModel):
    success: bool = False
    error: str
    query: str = ""


class ServerErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str
    timestamp: str


class SourceStatus(BaseModel):
    zendesk: bool
    docs: bool
    knowledge_base: bool


class HealthResponse(BaseModel):
    status: str = "OK"
    service: str
    version: str
    timestamp: str
    sources: SourceStatus
