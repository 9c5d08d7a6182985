"""Docusaurus documentation search over the site's prebuilt search index."""

from typing import Any

from unified_search.models import DOCS, SearchResult
from unified_search.sources.base import SourceAdapter
from unified_search.utils.logging import get_logger
from unified_search.utils.timefmt import iso_timestamp

logger = get_logger(__name__)

DEFAULT_CATEGORY = "Documentation"
DOCS_WEIGHT = 0.9

TITLE_PHRASE_SCORE = 100
BREADCRUMB_PHRASE_SCORE = 50
TITLE_WORD_SCORE = 20
BREADCRUMB_WORD_SCORE = 10


def score_document(title: str, breadcrumbs: list[str], query: str) -> float:
    """
    Lexical score of one index document against ``query``, before weighting.

    +100 for the full query in the title, +50 for it in the breadcrumbs, then
    per query word longer than two characters +20 for a title hit and +10 for
    a breadcrumb hit.
    """
    query_lower = query.lower().strip()
    query_words = [word for word in query_lower.split() if len(word) > 2]
    title_lower = title.lower()
    breadcrumb_text = " ".join(breadcrumbs).lower()

    score = 0
    if query_lower in title_lower:
        score += TITLE_PHRASE_SCORE
    if query_lower in breadcrumb_text:
        score += BREADCRUMB_PHRASE_SCORE

    for word in query_words:
        if word in title_lower:
            score += TITLE_WORD_SCORE
        if word in breadcrumb_text:
            score += BREADCRUMB_WORD_SCORE

    return float(score)


class DocsAdapter(SourceAdapter):
    name = DOCS

    @property
    def base_url(self) -> str:
        return self.settings.docs_base_url.rstrip("/")

    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        data = await self._get_json(f"{self.base_url}/search-index.json")

        if not isinstance(data, list) or not data:
            logger.warning("Invalid Docusaurus search index format", extra={"source": self.name})
            return []

        index = data[0]
        documents = index.get("documents") if isinstance(index, dict) else None
        if not isinstance(documents, list):
            logger.warning("No documents found in Docusaurus search index", extra={"source": self.name})
            return []

        # The index has no timestamps; every hit counts as current
        fetched_at = iso_timestamp()
        results = []
        for doc in documents:
            if not isinstance(doc, dict) or not doc.get("t") or not doc.get("u"):
                continue

            title = str(doc["t"])
            breadcrumbs = [str(b) for b in doc.get("b") or []]
            score = score_document(title, breadcrumbs, query)
            if score <= 0:
                continue

            results.append(self._to_result(doc, title, breadcrumbs, score, fetched_at))

        # Adapter-local ordering decides what survives the cut to ``limit``
        results.sort(key=lambda r: r.score, reverse=True)
        return results[:limit]

    def _to_result(
        self,
        doc: dict[str, Any],
        title: str,
        breadcrumbs: list[str],
        score: float,
        fetched_at: str,
    ) -> SearchResult:
        trail = " › ".join(breadcrumbs) if breadcrumbs else DEFAULT_CATEGORY
        return SearchResult(
            id=f"docs_{doc.get('i')}",
            title=title,
            url=f"{self.base_url}{doc['u']}",
            snippet=f"{trail} - {title}",
            content=f"{title} - {', '.join(breadcrumbs)}",
            score=score * DOCS_WEIGHT,
            source=self.name,
            category=breadcrumbs[0] if breadcrumbs else DEFAULT_CATEGORY,
            section=breadcrumbs[1] if len(breadcrumbs) > 1 else None,
            last_updated=fetched_at,
            metadata={
                "breadcrumbs": breadcrumbs,
                "docusaurus_id": doc.get("i"),
                "search_type": "docusaurus",
            },
        )
