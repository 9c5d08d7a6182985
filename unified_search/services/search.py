"""Unified search flow: dispatch, rank, truncate, shape."""

from typing import Mapping

from unified_search.models import SearchRequest, SearchResponse
from unified_search.services.fanout import dispatch
from unified_search.services.ranking import rank_results
from unified_search.sources.base import SourceAdapter
from unified_search.utils.logging import get_logger
from unified_search.utils.timefmt import iso_timestamp

logger = get_logger(__name__)


class UnifiedSearchService:
    """Runs one validated search request against the registered adapters."""

    def __init__(self, adapters: Mapping[str, SourceAdapter]):
        self.adapters = adapters

    async def search(self, request: SearchRequest) -> SearchResponse:
        enabled = request.enabled_sources

        logger.info(
            f"Unified search request: limit={request.limit} sources={len(enabled)}",
            extra={"query": request.query[:100]},
        )

        if request.limit > 0:
            collected = await dispatch(self.adapters, request.query, request.limit, enabled)
        else:
            # Nothing can be returned; sources are not queried
            collected = []
        ranked = rank_results(collected, request.query)
        final = ranked[: max(request.limit, 0)]

        logger.info(
            f"Unified search completed: {len(final)} results from {len(enabled)} sources",
            extra={"query": request.query[:100], "result_count": len(final)},
        )

        return SearchResponse(
            results=final,
            total=len(collected),
            returned=len(final),
            query=request.query,
            sources=enabled,
            timestamp=iso_timestamp(),
        )
