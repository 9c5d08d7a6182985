"""Common shape for upstream source adapters."""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from unified_search.config import Settings
from unified_search.exceptions import MalformedResponseError, NetworkError, SourceAPIError
from unified_search.models import SearchResult
from unified_search.utils.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = "MXchatbot-UnifiedSearch/1.0"


class SourceAdapter(ABC):
    """Translate a generic query into one upstream source's request and schema.

    ``search`` is the only public entry point and never raises: any failure
    inside ``_search`` is logged and turned into an empty result list, so an
    outage of one source only reduces coverage.
    """

    name: str = ""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.timeout = settings.source_timeout
        self.transport = transport

    async def search(self, query: str, limit: int) -> list[SearchResult]:
        try:
            results = await self._search(query, limit)
        except Exception as e:
            logger.error(
                f"{self.name} search error: {e}",
                extra={"source": self.name, "query": query[:100], "error": str(e)},
            )
            return []

        logger.info(
            f"{self.name} search returned {len(results)} results",
            extra={"source": self.name, "result_count": len(results)},
        )
        return results

    @abstractmethod
    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        """Run the upstream request; may raise."""

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | None = None,
    ) -> Any:
        """GET ``url`` with this adapter's timeout and decode the JSON body.

        Raises:
            SourceAPIError: On non-2xx responses
            NetworkError: On connection errors and timeouts
            MalformedResponseError: When the body is not JSON
        """
        request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        request_headers.update(headers or {})

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(url, params=params, headers=request_headers, auth=auth)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise SourceAPIError(
                    source=self.name,
                    status_code=e.response.status_code,
                    message=f"API returned {e.response.status_code}",
                    response_text=e.response.text[:1000],
                ) from e
            except httpx.RequestError as e:
                raise NetworkError(f"Network error connecting to {self.name}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{self.name} returned a non-JSON body") from e
