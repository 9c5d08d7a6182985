"""Shared fixtures for unified search tests."""

import json
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from unified_search.config import Settings, get_settings
from unified_search.dependencies import get_search_service
from unified_search.main import create_app
from unified_search.models import SearchResult
from unified_search.services.search import UnifiedSearchService
from unified_search.sources.base import SourceAdapter

API_KEY = "test-key"
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    """Settings isolated from the process environment and any .env file."""
    return Settings(
        _env_file=None,
        zendesk_subdomain="acme",
        zendesk_email="agent@example.com",
        zendesk_api_token="secret",
        docs_base_url="https://docs.example.com",
        api_key=API_KEY,
        environment="production",
    )


def make_result(**overrides) -> SearchResult:
    fields = {
        "id": "zendesk_1",
        "title": "Untitled article",
        "url": "https://example.com/1",
        "snippet": "",
        "content": "",
        "score": 0.0,
        "source": "zendesk",
        "last_updated": None,
    }
    fields.update(overrides)
    return SearchResult(**fields)


class StaticAdapter(SourceAdapter):
    """Adapter returning canned results and recording its calls."""

    def __init__(self, settings, name, results=None, error=None):
        super().__init__(settings)
        self.name = name
        self.results = results or []
        self.error = error
        self.calls = []

    async def _search(self, query, limit):
        self.calls.append((query, limit))
        if self.error:
            raise self.error
        return list(self.results)


class ExplodingAdapter(StaticAdapter):
    """Adapter whose public search raises, bypassing the adapter boundary."""

    async def search(self, query, limit):
        self.calls.append((query, limit))
        raise RuntimeError("adapter defect")


def zendesk_article(article_id, title, **extra):
    article = {
        "id": article_id,
        "title": title,
        "html_url": f"https://acme.zendesk.com/hc/articles/{article_id}",
        "body": f"<p>{title} body</p>",
        "score": 10,
        "section_id": 42,
        "updated_at": "2020-01-01T00:00:00Z",
        "locale": "en-us",
        "created_at": "2019-01-01T00:00:00Z",
    }
    article.update(extra)
    return article


def upstream_transport(articles=None, documents=None, status_code=200, requests=None):
    """MockTransport serving the help center search API and the docs index."""
    articles = articles or []
    documents = documents or []

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if status_code != 200:
            return httpx.Response(status_code, text="upstream failure")
        if request.url.path.endswith("/help_center/articles/search.json"):
            return httpx.Response(200, json={"results": articles})
        if request.url.path == "/search-index.json":
            return httpx.Response(200, content=json.dumps([{"documents": documents}]))
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_client(settings):
    """Build a TestClient whose search service uses the given adapters."""

    def _make(adapters):
        app = create_app(settings)
        service = UnifiedSearchService(adapters)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_search_service] = lambda: service
        return TestClient(app)

    return _make


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {API_KEY}"}
