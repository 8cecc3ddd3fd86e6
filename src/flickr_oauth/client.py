"""Main Flickr client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from flickr_oauth.api import FlickrAPI
from flickr_oauth.auth import FileSecretStore, FlickrOAuth
from flickr_oauth.config import FlickrConfig
from flickr_oauth.models.auth import AuthResult, Permission
from flickr_oauth.transport import HttpxTransport

if TYPE_CHECKING:
    from types import TracebackType

    from flickr_oauth.auth import AuthorizationSurface, SecretStore
    from flickr_oauth.auth.oauth import CompletionHandler
    from flickr_oauth.models.auth import AuthenticatedUser


class FlickrClient:
    """Flickr API client.

    Wires the OAuth handler, REST API and a shared httpx connection pool.

    Usage (context manager - recommended for connection pooling):
        async with FlickrClient(config, authorizer=authorizer) as client:
            result = await client.authenticate(Permission.WRITE)
            me = await client.api.test_login()

    Usage (external HTTP client - shared across integrations):
        http_client = httpx.AsyncClient(timeout=30.0)
        client = FlickrClient(config, http_client=http_client)
        # Client uses shared pool, doesn't close it
    """

    def __init__(
        self,
        config: FlickrConfig,
        *,
        secret_store: SecretStore | None = None,
        authorizer: AuthorizationSurface | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Flickr application credentials
            secret_store: Token storage (file store in XDG_DATA_HOME if not provided)
            authorizer: Surface that collects user consent during authenticate()
            http_client: Optional httpx.AsyncClient for connection pooling.
                        If provided, the client will use this pool and NOT close it.
        """
        self.config = config
        self.secret_store = secret_store if secret_store is not None else FileSecretStore()

        # HTTP client management
        self._http_client = http_client
        self._owns_http_client = http_client is None

        self.transport = HttpxTransport(http_client)
        self.auth = FlickrOAuth(
            config,
            transport=self.transport,
            secret_store=self.secret_store,
            authorizer=authorizer,
        )
        self.api = FlickrAPI(config, self.auth, http_client)

    def _set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Update HTTP client on transport and API."""
        self._http_client = http_client
        self.transport.set_http_client(http_client)
        self.api.set_http_client(http_client)

    async def open(self) -> None:
        """Open connection pool for HTTP requests."""
        if self._http_client is None and self._owns_http_client:
            self._set_http_client(httpx.AsyncClient(timeout=30.0))

    async def close(self) -> None:
        """Close connection pool.

        Only closes the pool if this client owns it (not external).
        """
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._set_http_client(None)

    async def __aenter__(self) -> FlickrClient:
        """Async context manager entry - opens connection pool."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes connection pool."""
        await self.close()

    @classmethod
    def from_env(cls, **kwargs: object) -> FlickrClient:
        """Create client from FLICKR_CONSUMER_KEY / FLICKR_CONSUMER_SECRET."""
        return cls(FlickrConfig.from_env(), **kwargs)  # type: ignore[arg-type]

    @property
    def is_authenticated(self) -> bool:
        """Check if the client has a stored access token."""
        return self.auth.is_authenticated

    @property
    def current_user(self) -> AuthenticatedUser | None:
        return self.auth.current_user

    async def authenticate(
        self,
        permission: Permission = Permission.READ,
        on_complete: CompletionHandler | None = None,
    ) -> AuthResult:
        """Run the OAuth flow and store the resulting token."""
        return await self.auth.authenticate(permission, on_complete)

    def logout(self) -> None:
        """Clear the stored token and user."""
        self.auth.logout()
