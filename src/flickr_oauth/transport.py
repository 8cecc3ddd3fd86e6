"""HTTP transport for the OAuth endpoints."""

import logging
from typing import Protocol

import httpx

from flickr_oauth.exceptions import FlickrTransportError

logger = logging.getLogger(__name__)


class HttpTransport(Protocol):
    """Issues a request and returns the raw response body."""

    async def fetch(self, url: str, method: str = "GET") -> bytes: ...


class HttpxTransport:
    """HttpTransport backed by httpx.

    No retries are performed; callers own timeouts through the httpx client.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 30.0,
    ) -> None:
        self._http_client = http_client
        self.timeout = timeout

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    async def fetch(self, url: str, method: str = "GET") -> bytes:
        """Fetch ``url`` and return the body.

        Raises:
            FlickrTransportError: On connection failure or HTTP error status
        """
        logger.debug("Request: %s %s", method, url.split("?", 1)[0])

        try:
            if self._http_client is not None:
                response = await self._http_client.request(method, url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, url)
        except httpx.HTTPError as e:
            raise FlickrTransportError(f"Connection failed: {e}") from e

        if response.status_code >= 400:
            raise FlickrTransportError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        return response.content
