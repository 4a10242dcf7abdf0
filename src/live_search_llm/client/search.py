from urllib.parse import quote

import httpx

from live_search_llm.client.base import HttpClient
from live_search_llm.config import get_settings
from live_search_llm.errors import ProtocolError, TransportError
from live_search_llm.result import Err, Ok, OperationResult


def encode_query(query: str) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set."""
    return quote(query, safe="")


class SearchClient(HttpClient):
    """Lookups against the DuckDuckGo instant-answer and Wikipedia summary APIs."""

    def __init__(
        self,
        duckduckgo_url: str | None = None,
        wikipedia_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        super().__init__(timeout=timeout if timeout is not None else settings.timeout, transport=transport)
        self.duckduckgo_url = duckduckgo_url or settings.duckduckgo_url
        self.wikipedia_url = wikipedia_url or settings.wikipedia_url

    def web_url(self, query: str) -> str:
        return f"{self.duckduckgo_url}?q={encode_query(query)}&format=json"

    def encyclopedia_url(self, query: str) -> str:
        return f"{self.wikipedia_url.rstrip('/')}/{encode_query(query)}"

    async def _get(self, url: str, failure: str) -> OperationResult:
        try:
            body = await self.request("GET", url)
        except TransportError as e:
            return Err(str(e))
        except ProtocolError as e:
            self.logger.info("Lookup %s answered %s", url, e)
            return Err(failure)
        self.logger.debug("Lookup %s returned %d chars", url, len(body))
        return Ok(body)

    async def search_web(self, query: str) -> OperationResult:
        return await self._get(self.web_url(query), "Search failed")

    async def search_encyclopedia(self, query: str) -> OperationResult:
        return await self._get(self.encyclopedia_url(query), "Wikipedia search failed")
