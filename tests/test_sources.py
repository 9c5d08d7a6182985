"""Tests for the upstream source adapters."""

import base64

import httpx
import pytest
from conftest import upstream_transport, zendesk_article

from unified_search.sources import (
    ADAPTER_TYPES,
    DocsAdapter,
    KnowledgeBaseAdapter,
    ZendeskAdapter,
    build_adapters,
)
from unified_search.sources.docs import score_document
from unified_search.sources.knowledge_base import KEYWORD_FILTER


def test_registry_covers_every_source(settings):
    adapters = build_adapters(settings)
    assert set(adapters) == {"zendesk", "docs", "knowledge_base"}
    for name, adapter in adapters.items():
        assert isinstance(adapter, ADAPTER_TYPES[name])
        assert adapter.name == name
        assert adapter.timeout == 5.0


@pytest.mark.asyncio
async def test_zendesk_request_and_mapping(settings):
    requests = []
    transport = upstream_transport(
        articles=[zendesk_article(7, "Password reset", body="<p>Click <b>Forgot</b> &amp; go</p>")],
        requests=requests,
    )
    results = await ZendeskAdapter(settings, transport=transport).search("  password reset ", 2)

    request = requests[0]
    assert request.url.host == "acme.zendesk.com"
    assert request.url.path == "/api/v2/help_center/articles/search.json"
    assert request.url.params["query"] == "password reset"
    assert request.url.params["locale"] == "en-us"
    assert request.url.params["per_page"] == "2"
    expected = base64.b64encode(b"agent@example.com/token:secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"

    assert len(results) == 1
    result = results[0]
    assert result.id == "zendesk_7"
    assert result.source == "zendesk"
    assert result.score == 10
    assert result.snippet == "Click Forgot & go"
    assert result.content == "<p>Click <b>Forgot</b> &amp; go</p>"
    assert result.category == "Section 42"
    assert result.section == "42"
    assert result.last_updated == "2020-01-01T00:00:00Z"
    assert result.metadata == {"locale": "en-us", "created_at": "2019-01-01T00:00:00Z", "article_id": 7}


@pytest.mark.asyncio
async def test_zendesk_defaults_missing_score_and_section(settings):
    article = zendesk_article(8, "Login help", score=None, section_id=None, body=None)
    results = await ZendeskAdapter(settings, transport=upstream_transport(articles=[article])).search("login", 4)
    assert results[0].score == 0
    assert results[0].category is None
    assert results[0].section is None
    assert results[0].snippet == "No preview available"


@pytest.mark.asyncio
async def test_zendesk_skips_articles_without_title(settings):
    articles = [zendesk_article(1, ""), zendesk_article(2, "Kept"), "garbage"]
    results = await ZendeskAdapter(settings, transport=upstream_transport(articles=articles)).search("kept", 4)
    assert [r.id for r in results] == ["zendesk_2"]


@pytest.mark.asyncio
async def test_knowledge_base_biases_query_and_weights_score(settings):
    requests = []
    transport = upstream_transport(articles=[zendesk_article(9, "Sync error")], requests=requests)
    results = await KnowledgeBaseAdapter(settings, transport=transport).search("sync", 3)

    assert requests[0].url.params["query"] == f"sync {KEYWORD_FILTER}"
    assert requests[0].url.params["per_page"] == "3"
    result = results[0]
    assert result.id == "kb_9"
    assert result.source == "knowledge_base"
    assert result.score == pytest.approx(8.0)
    assert result.category == "Knowledge Base"
    assert result.metadata["search_type"] == "knowledge_base"


@pytest.mark.asyncio
@pytest.mark.parametrize("adapter_cls", [ZendeskAdapter, KnowledgeBaseAdapter, DocsAdapter])
async def test_upstream_http_error_yields_empty_list(settings, adapter_cls):
    adapter = adapter_cls(settings, transport=upstream_transport(status_code=503))
    assert await adapter.search("password", 3) == []


@pytest.mark.asyncio
async def test_timeout_yields_empty_list(settings):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    adapter = ZendeskAdapter(settings, transport=httpx.MockTransport(handler))
    assert await adapter.search("password", 3) == []


@pytest.mark.asyncio
async def test_malformed_body_yields_empty_list(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>not json"))
    assert await ZendeskAdapter(settings, transport=transport).search("password", 3) == []

    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"articles": []}))
    assert await ZendeskAdapter(settings, transport=transport).search("password", 3) == []


@pytest.mark.asyncio
async def test_unconfigured_help_center_skips_network(settings):
    requests = []
    unconfigured = settings.model_copy(update={"zendesk_subdomain": ""})
    adapter = ZendeskAdapter(unconfigured, transport=upstream_transport(requests=requests))
    assert await adapter.search("password", 3) == []
    assert requests == []


def test_score_document_rules():
    assert score_document("Password Reset Guide", [], "password") == 100 + 20
    assert score_document("Password Reset Guide", [], "password reset") == 100 + 20 + 20
    assert score_document("Users", ["Account", "Password reset"], "password reset") == 50 + 10 + 10
    assert score_document("Billing", ["Admin"], "password") == 0
    # Words of two characters or fewer only count through the phrase match
    assert score_document("Go live", [], "go") == 100


@pytest.mark.asyncio
async def test_docs_scoring_mapping_and_local_order(settings):
    documents = [
        {"t": "Billing overview", "u": "/docs/billing", "b": ["Admin"], "i": 1},
        {"t": "Password Reset Guide", "u": "/docs/password-reset", "b": ["Account", "Security"], "i": 2},
        {"t": "Password policy", "u": "/docs/policy", "b": [], "i": 3},
        {"t": "", "u": "/docs/empty", "i": 4},
        {"t": "No url", "i": 5},
    ]
    requests = []
    transport = upstream_transport(documents=documents, requests=requests)
    results = await DocsAdapter(settings, transport=transport).search("password reset", 5)

    assert str(requests[0].url) == "https://docs.example.com/search-index.json"
    assert [r.id for r in results] == ["docs_2", "docs_3"]

    guide = results[0]
    assert guide.score == pytest.approx((100 + 20 + 20) * 0.9)
    assert guide.url == "https://docs.example.com/docs/password-reset"
    assert guide.snippet == "Account › Security - Password Reset Guide"
    assert guide.content == "Password Reset Guide - Account, Security"
    assert guide.category == "Account"
    assert guide.section == "Security"
    assert guide.last_updated is not None
    assert guide.metadata == {
        "breadcrumbs": ["Account", "Security"],
        "docusaurus_id": 2,
        "search_type": "docusaurus",
    }

    policy = results[1]
    assert policy.score == pytest.approx(20 * 0.9)
    assert policy.category == "Documentation"
    assert policy.section is None
    assert policy.snippet == "Documentation - Password policy"


@pytest.mark.asyncio
async def test_docs_truncates_after_sorting(settings):
    documents = [
        {"t": "Password tips", "u": "/a", "i": 1},
        {"t": "Password reset", "u": "/b", "i": 2},
    ]
    results = await DocsAdapter(settings, transport=upstream_transport(documents=documents)).search(
        "password reset", 1
    )
    assert [r.id for r in results] == ["docs_2"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, [], [{"no_documents": True}], ["string"]])
async def test_docs_unexpected_index_shape_yields_empty_list(settings, body):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    assert await DocsAdapter(settings, transport=transport).search("password", 3) == []
