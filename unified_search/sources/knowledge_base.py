"""Help Center search biased toward FAQ and troubleshooting content."""

from typing import Any

from unified_search.models import KNOWLEDGE_BASE
from unified_search.sources.zendesk import HelpCenterAdapter

KEYWORD_FILTER = '(FAQ OR troubleshooting OR "how to" OR problem OR issue OR error)'
CATEGORY = "Knowledge Base"


class KnowledgeBaseAdapter(HelpCenterAdapter):
    """Same endpoint as ZendeskAdapter, ranked below direct results."""

    name = KNOWLEDGE_BASE
    id_prefix = "kb"
    score_weight = 0.8

    def build_query(self, query: str) -> str:
        return f"{query.strip()} {KEYWORD_FILTER}"

    def category_for(self, article: dict[str, Any]) -> str | None:
        return CATEGORY

    def metadata_for(self, article: dict[str, Any]) -> dict[str, Any]:
        metadata = super().metadata_for(article)
        metadata["search_type"] = "knowledge_base"
        return metadata
