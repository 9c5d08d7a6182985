"""Zendesk Help Center article search."""

from typing import Any

import httpx

from unified_search.exceptions import MalformedResponseError
from unified_search.models import ZENDESK, SearchResult
from unified_search.sources.base import SourceAdapter
from unified_search.utils.logging import get_logger
from unified_search.utils.text import strip_html_snippet

logger = get_logger(__name__)

SNIPPET_LENGTH = 200


class HelpCenterAdapter(SourceAdapter):
    """Shared request and mapping logic for Help Center article search."""

    id_prefix = "zendesk"
    score_weight = 1.0

    def build_query(self, query: str) -> str:
        return query.strip()

    def category_for(self, article: dict[str, Any]) -> str | None:
        section_id = article.get("section_id")
        return f"Section {section_id}" if section_id else None

    def metadata_for(self, article: dict[str, Any]) -> dict[str, Any]:
        return {
            "locale": article.get("locale"),
            "created_at": article.get("created_at"),
            "article_id": article.get("id"),
        }

    def _auth(self) -> httpx.BasicAuth:
        # Zendesk API token auth: "{email}/token" with the token as password
        return httpx.BasicAuth(f"{self.settings.zendesk_email}/token", self.settings.zendesk_api_token)

    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        if not self.settings.zendesk_configured:
            logger.warning(
                f"ZENDESK_SUBDOMAIN not set, skipping {self.name} search",
                extra={"source": self.name},
            )
            return []

        data = await self._get_json(
            f"{self.settings.zendesk_base_url}/help_center/articles/search.json",
            params={
                "query": self.build_query(query),
                "locale": self.settings.zendesk_locale,
                "per_page": limit,
            },
            headers={"Content-Type": "application/json"},
            auth=self._auth(),
        )

        articles = data.get("results") if isinstance(data, dict) else None
        if not isinstance(articles, list):
            raise MalformedResponseError(f"{self.name} response has no results list")

        results = []
        for article in articles:
            try:
                result = self._map_article(article)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed {self.name} article: {e}", extra={"source": self.name})
                continue
            if result is not None:
                results.append(result)
        return results

    def _map_article(self, article: Any) -> SearchResult | None:
        if not isinstance(article, dict):
            return None
        title = article.get("title")
        article_id = article.get("id")
        if not title or article_id is None:
            return None

        body = article.get("body") or ""
        base_score = max(0.0, float(article.get("score") or 0))
        section_id = article.get("section_id")

        return SearchResult(
            id=f"{self.id_prefix}_{article_id}",
            title=str(title),
            url=article.get("html_url") or "",
            snippet=strip_html_snippet(body, SNIPPET_LENGTH),
            content=body if isinstance(body, str) else str(body),
            score=base_score * self.score_weight,
            source=self.name,
            category=self.category_for(article),
            section=str(section_id) if section_id is not None else None,
            last_updated=article.get("updated_at"),
            metadata=self.metadata_for(article),
        )


class ZendeskAdapter(HelpCenterAdapter):
    """Direct Help Center search; scores are taken verbatim."""

    name = ZENDESK
