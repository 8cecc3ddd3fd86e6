"""Base API client with common functionality."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from flickr_oauth.exceptions import FlickrAPIError, FlickrRateLimitError

if TYPE_CHECKING:
    from flickr_oauth.auth import FlickrOAuth
    from flickr_oauth.config import FlickrConfig

logger = logging.getLogger(__name__)


def _wait_for_rate_limit(retry_state: RetryCallState) -> float:
    """Custom wait strategy that respects Retry-After header.

    If the exception has a retry_after value, use it.
    Otherwise, fall back to exponential backoff.
    """
    exception = retry_state.outcome.exception() if retry_state.outcome else None

    if isinstance(exception, FlickrRateLimitError) and exception.retry_after:
        wait_time = float(exception.retry_after)
        logger.info("Rate limited, waiting %s seconds (from Retry-After header)", wait_time)
        return wait_time

    # Exponential backoff: 2, 4, 8, 16... capped at 60 seconds
    exp_wait = wait_exponential(multiplier=1, min=2, max=60)
    wait_time = exp_wait(retry_state)
    logger.info("Rate limited, waiting %.1f seconds (exponential backoff)", wait_time)
    return wait_time


class BaseAPI:
    """Base class for Flickr REST API calls.

    Signs every request through FlickrOAuth.build_signed_url and turns
    Flickr's ``stat``/``code`` envelope into typed errors.
    """

    def __init__(
        self,
        config: FlickrConfig,
        auth: FlickrOAuth,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._http_client = http_client

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    @retry(
        retry=retry_if_exception_type(FlickrRateLimitError),
        wait=_wait_for_rate_limit,
        stop=stop_after_attempt(5),
        reraise=True,
    )
    async def _request(
        self,
        http_method: str,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a signed REST API call.

        Automatically retries on rate limit (429) with exponential backoff,
        respecting Retry-After header when provided.

        Args:
            http_method: HTTP method
            method: Flickr API method (e.g., "flickr.test.login")
            params: Method arguments

        Returns:
            Parsed JSON response

        Raises:
            FlickrTokenError: If not authenticated
            FlickrAPIError: On API error
            FlickrRateLimitError: On rate limit (429) after max retries
        """
        query_params: dict[str, str] = {
            "method": method,
            "format": "json",
            "nojsoncallback": "1",
        }
        if params:
            query_params.update({k: str(v) for k, v in params.items() if v is not None})

        # A fresh nonce and signature per attempt
        url = self.auth.build_signed_url(http_method, self.config.rest_url, query_params)

        logger.debug("Request: %s %s", http_method, method)
        logger.debug("Params: %s", params)

        if self._http_client is not None:
            # Use shared connection pool
            response = await self._http_client.request(http_method, url)
        else:
            # Fallback: create per-request client (no pooling)
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.request(http_method, url)

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Handle API response, raising appropriate errors."""
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise FlickrRateLimitError(
                "Rate limit exceeded",
                retry_after=int(retry_after) if retry_after else None,
            )

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            raise FlickrAPIError(
                f"API error: {response.status_code}",
                status_code=response.status_code,
                response_body=body,
            )

        if not isinstance(body, dict):
            raise FlickrAPIError(
                "API returned a non-JSON response",
                status_code=response.status_code,
            )

        if body.get("stat") == "fail":
            code = body.get("code")
            raise FlickrAPIError(
                body.get("message", "API call failed"),
                status_code=response.status_code,
                error_code=str(code) if code is not None else None,
                response_body=body,
            )

        return body

    async def _get(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make a GET call."""
        return await self._request("GET", method, params)
