"""Flickr REST API methods."""

from typing import Any

from flickr_oauth.api.base import BaseAPI
from flickr_oauth.models.api import LoginIdentity

# Flickr error codes meaning the stored token is no longer usable
INVALID_TOKEN_CODES = frozenset({"98", "99"})


class FlickrAPI(BaseAPI):
    """Signed access to the Flickr REST API."""

    async def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        http_method: str = "GET",
    ) -> dict[str, Any]:
        """Call any Flickr API method.

        Args:
            method: Flickr method name, e.g. "flickr.photos.search"
            params: Method arguments
            http_method: GET for reads, POST for writes

        Returns:
            Decoded JSON response
        """
        return await self._request(http_method.upper(), method, params)

    async def test_login(self) -> LoginIdentity:
        """Check the stored token and return the account it belongs to."""
        data = await self._get("flickr.test.login")
        return LoginIdentity.from_api_response(data)
