"""Upstream source adapters, keyed by source tag."""

import httpx

from unified_search.config import Settings
from unified_search.models import DOCS, KNOWLEDGE_BASE, ZENDESK

from .base import SourceAdapter
from .docs import DocsAdapter
from .knowledge_base import KnowledgeBaseAdapter
from .zendesk import ZendeskAdapter

ADAPTER_TYPES: dict[str, type[SourceAdapter]] = {
    ZENDESK: ZendeskAdapter,
    DOCS: DocsAdapter,
    KNOWLEDGE_BASE: KnowledgeBaseAdapter,
}


def build_adapters(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, SourceAdapter]:
    """Instantiate one adapter per known source with shared read-only settings."""
    return {name: cls(settings, transport=transport) for name, cls in ADAPTER_TYPES.items()}


__all__ = [
    "ADAPTER_TYPES",
    "DocsAdapter",
    "KnowledgeBaseAdapter",
    "SourceAdapter",
    "ZendeskAdapter",
    "build_adapters",
]
