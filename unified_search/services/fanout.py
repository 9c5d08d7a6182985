"""Concurrent dispatch of a query to every enabled source adapter."""

import asyncio
from typing import Iterable, Mapping

from unified_search.models import DOCS, KNOWLEDGE_BASE, ZENDESK, SearchResult
from unified_search.sources.base import SourceAdapter
from unified_search.utils.logging import get_logger

logger = get_logger(__name__)

# Percentage of the requested limit each source may contribute. Rounded up with
# integer arithmetic, so limit=10 gives docs 3 (float 10 * 0.3 would ceil to 4).
LIMIT_SHARES = {
    ZENDESK: 40,
    DOCS: 30,
    KNOWLEDGE_BASE: 30,
}


def source_limit(source: str, limit: int) -> int:
    """Per-source page size: the source's share of ``limit``, rounded up."""
    share = LIMIT_SHARES.get(source, 0)
    return -(-limit * share // 100)


def _deduplicate_results(results: list[SearchResult]) -> list[SearchResult]:
    """Remove results whose id was already seen, keeping the first."""
    seen_ids = set()
    unique = []
    for result in results:
        if result.id not in seen_ids:
            seen_ids.add(result.id)
            unique.append(result)
    return unique


async def dispatch(
    adapters: Mapping[str, SourceAdapter],
    query: str,
    limit: int,
    enabled_sources: Iterable[str],
) -> list[SearchResult]:
    """
    Query all enabled sources concurrently and merge what succeeded.

    Every adapter call runs to completion (success or failure) before merging;
    one failing source never cancels or truncates another. Results are
    concatenated in ``enabled_sources`` order, not completion order.
    """
    names = [name for name in enabled_sources if name in adapters]
    calls = [adapters[name].search(query, source_limit(name, limit)) for name in names]

    outcomes = await asyncio.gather(*calls, return_exceptions=True)

    merged: list[SearchResult] = []
    for name, outcome in zip(names, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning(
                f"{name} search failed: {outcome}",
                extra={"source": name, "error": str(outcome)},
            )
            continue
        if not outcome:
            logger.info(f"{name} search returned no results", extra={"source": name})
            continue
        logger.info(
            f"{name} search: {len(outcome)} results",
            extra={"source": name, "result_count": len(outcome)},
        )
        merged.extend(outcome)

    return _deduplicate_results(merged)
