from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from unified_search.exceptions import QueryValidationError
from unified_search.models import SearchRequest

MIN_QUERY_LENGTH = 2
QUERY_TOO_SHORT = "Query must be at least 2 characters long"


def is_valid_query(query: Any) -> bool:
    """True when ``query`` is a string with at least two non-blank characters."""
    return isinstance(query, str) and len(query.strip()) >= MIN_QUERY_LENGTH


def validate_search_payload(payload: Any) -> SearchRequest:
    """Validate a raw JSON body into a SearchRequest.

    Args:
        payload: Decoded request body

    Returns:
        SearchRequest with a trimmed query

    Raises:
        QueryValidationError: On a missing/short query or invalid optional fields
    """
    if not isinstance(payload, dict):
        raise QueryValidationError(QUERY_TOO_SHORT, "")

    query = payload.get("query")
    if not is_valid_query(query):
        echoed = query if isinstance(query, str) else ""
        raise QueryValidationError(QUERY_TOO_SHORT, echoed)

    # Explicit nulls fall back to defaults
    fields = {k: v for k, v in payload.items() if v is not None}
    fields["query"] = query.strip()

    try:
        return SearchRequest.model_validate(fields)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid '{location}': {first.get('msg', 'invalid value')}"
        raise QueryValidationError(message, query.strip()) from e
