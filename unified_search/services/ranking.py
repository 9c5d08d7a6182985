"""Multi-factor re-ranking of merged results."""

from datetime import datetime

from unified_search.models import DOCS, KNOWLEDGE_BASE, ZENDESK, SearchResult
from unified_search.utils.timefmt import parse_timestamp, utc_now

TITLE_TERM_BOOST = 20
TITLE_PHRASE_BOOST = 30

SOURCE_PRIORITY = {
    ZENDESK: 10,
    KNOWLEDGE_BASE: 8,
    DOCS: 6,
}

RECENT_DAYS = 30
RECENT_BOOST = 5
VERY_RECENT_DAYS = 7
VERY_RECENT_BOOST = 10

SECONDS_PER_DAY = 60 * 60 * 24


def query_terms(query: str) -> list[str]:
    """Case-folded whitespace tokens longer than two characters."""
    return [term for term in query.lower().split() if len(term) > 2]


def recency_boost(last_updated: str | None, now: datetime) -> float:
    """+5 under 30 days old, a further +10 under 7 days; unparseable dates get 0."""
    updated = parse_timestamp(last_updated)
    if updated is None:
        return 0.0

    age_days = (now - updated).total_seconds() / SECONDS_PER_DAY
    boost = 0.0
    if age_days < RECENT_DAYS:
        boost += RECENT_BOOST
    if age_days < VERY_RECENT_DAYS:
        boost += VERY_RECENT_BOOST
    return boost


def calculate_final_score(
    result: SearchResult,
    query: str,
    terms: list[str],
    now: datetime,
) -> float:
    """
    Final score for one result.

    Components, added to the source-provided score:
    1. +20 per query term found in the title
    2. +30 when the whole query appears in the title
    3. Source priority (zendesk 10, knowledge_base 8, docs 6, other 0)
    4. Recency boost (up to +15)
    """
    title_lower = result.title.lower()
    score = result.score or 0.0

    score += TITLE_TERM_BOOST * sum(1 for term in terms if term in title_lower)

    if query.lower() in title_lower:
        score += TITLE_PHRASE_BOOST

    score += SOURCE_PRIORITY.get(result.source, 0)
    score += recency_boost(result.last_updated, now)

    return score


def rank_results(
    results: list[SearchResult],
    query: str,
    now: datetime | None = None,
) -> list[SearchResult]:
    """
    Re-score ``results`` for ``query`` and sort by final score, descending.

    Inputs are not modified; ties keep their input order.
    """
    now = now or utc_now()
    terms = query_terms(query)

    rescored = [
        result.model_copy(update={"score": calculate_final_score(result, query, terms, now)})
        for result in results
    ]
    rescored.sort(key=lambda r: r.score, reverse=True)
    return rescored
