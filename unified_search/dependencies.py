"""FastAPI dependencies."""

from unified_search.config import get_settings
from unified_search.services.search import UnifiedSearchService
from unified_search.sources import build_adapters

_service: UnifiedSearchService | None = None


def get_search_service() -> UnifiedSearchService:
    """Process-wide search service; adapters are built once from settings."""
    global _service
    if _service is None:
        _service = UnifiedSearchService(build_adapters(get_settings()))
    return _service
