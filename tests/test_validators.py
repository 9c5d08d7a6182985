"""Tests for search request validation."""

import pytest

from unified_search.exceptions import QueryValidationError
from unified_search.models import ALL_SOURCES
from unified_search.utils.validators import QUERY_TOO_SHORT, is_valid_query, validate_search_payload


@pytest.mark.parametrize("query", [None, "", "x", " x ", "   ", 12, ["ab"]])
def test_invalid_queries(query):
    assert not is_valid_query(query)


def test_short_query_is_rejected_and_echoed():
    with pytest.raises(QueryValidationError) as exc_info:
        validate_search_payload({"query": "x"})
    assert exc_info.value.message == QUERY_TOO_SHORT
    assert exc_info.value.query == "x"


def test_non_text_query_echoes_empty_string():
    with pytest.raises(QueryValidationError) as exc_info:
        validate_search_payload({"query": 1234})
    assert exc_info.value.query == ""


def test_non_object_body_is_rejected():
    with pytest.raises(QueryValidationError):
        validate_search_payload(["password reset"])


def test_defaults_are_applied():
    request = validate_search_payload({"query": "  password reset  "})
    assert request.query == "password reset"
    assert request.limit == 10
    assert request.filters == {}
    assert request.sources == list(ALL_SOURCES)
    assert request.include_snippets is True
    assert request.sort_by == "relevance"


def test_explicit_nulls_fall_back_to_defaults():
    request = validate_search_payload({"query": "login", "limit": None, "sources": None})
    assert request.limit == 10
    assert request.enabled_sources == list(ALL_SOURCES)


def test_inert_fields_are_accepted():
    request = validate_search_payload(
        {"query": "login", "include_snippets": False, "sort_by": "date", "filters": {"lang": "en"}}
    )
    assert request.include_snippets is False
    assert request.sort_by == "date"
    assert request.filters == {"lang": "en"}


def test_unknown_sources_are_ignored_and_order_is_fixed():
    request = validate_search_payload(
        {"query": "login", "sources": ["knowledge_base", "wiki", "zendesk"]}
    )
    assert request.enabled_sources == ["zendesk", "knowledge_base"]


@pytest.mark.parametrize("limit", ["many", 5.5, [3]])
def test_invalid_limit_is_a_client_error(limit):
    with pytest.raises(QueryValidationError) as exc_info:
        validate_search_payload({"query": "login", "limit": limit})
    assert "limit" in exc_info.value.message
    assert exc_info.value.query == "login"


@pytest.mark.parametrize("limit", [0, 1, 150, 1000])
def test_any_integer_limit_is_accepted(limit):
    assert validate_search_payload({"query": "login", "limit": limit}).limit == limit


def test_non_string_sources_are_ignored():
    request = validate_search_payload({"query": "login", "sources": ["zendesk", 7, None, {"x": 1}]})
    assert request.enabled_sources == ["zendesk"]
