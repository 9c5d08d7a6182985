"""Fan-out, ranking and the unified search flow."""

from .fanout import dispatch, source_limit
from .ranking import rank_results
from .search import UnifiedSearchService

__all__ = ["UnifiedSearchService", "dispatch", "rank_results", "source_limit"]
