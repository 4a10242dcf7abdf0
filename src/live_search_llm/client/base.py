from typing import Any

import httpx

from live_search_llm.errors import ProtocolError, TransportError
from live_search_llm.utils import logging


class HttpClient:
    """Issues single buffered requests; one ``httpx.AsyncClient`` per call."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport
        self.logger = logging.get_logger(__name__)

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"transport": self.transport}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return httpx.AsyncClient(**kwargs)

    async def request(self, method: str, url: str, body: dict[str, Any] | None = None) -> str:
        """Send a request and return the body text.

        Raises ``TransportError`` when no response arrives and ``ProtocolError``
        for a non-2xx status.
        """
        headers = {"Content-Type": "application/json"} if method == "POST" else None
        self.logger.debug("%s %s", method, url)
        try:
            async with self._client() as client:
                response = await client.request(method, url, json=body, headers=headers)
        except httpx.HTTPError as e:
            self.logger.debug("%s %s failed: %r", method, url, e)
            raise TransportError(str(e) or type(e).__name__) from e

        self.logger.debug("%s %s -> %d", method, url, response.status_code)
        if not response.is_success:
            raise ProtocolError(response.status_code, response.reason_phrase)
        return response.text
