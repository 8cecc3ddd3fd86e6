"""Flickr OAuth 1.0a client library.

A typed, async client for Flickr's three-legged OAuth flow and signed
REST API calls.

Example:
    from flickr_oauth import FlickrClient, FlickrConfig, Permission

    config = FlickrConfig(
        consumer_key="your_key",
        consumer_secret="your_secret",
        callback_url="myapp://oauth-callback",
    )

    async with FlickrClient(config, authorizer=my_authorizer) as client:
        # First time: run the OAuth flow
        if not client.is_authenticated:
            result = await client.authenticate(Permission.WRITE)
            if not result.ok:
                raise SystemExit(result.message)

        # Sign URLs yourself...
        url = client.auth.build_signed_url(
            "GET",
            "https://api.flickr.com/services/rest",
            {"method": "flickr.photos.search", "user_id": "me"},
        )

        # ...or use the REST wrapper
        me = await client.api.test_login()
"""

from flickr_oauth.auth import FileSecretStore, FlickrOAuth, MemorySecretStore
from flickr_oauth.client import FlickrClient
from flickr_oauth.config import FlickrConfig
from flickr_oauth.exceptions import (
    FlickrAPIError,
    FlickrAuthError,
    FlickrAuthorizationError,
    FlickrCallbackNotConfirmedError,
    FlickrConfigError,
    FlickrError,
    FlickrIncompleteUserError,
    FlickrProtocolError,
    FlickrRateLimitError,
    FlickrStateError,
    FlickrTokenError,
    FlickrTransportError,
)
from flickr_oauth.models.auth import (
    AuthenticatedUser,
    AuthErrorKind,
    AuthFailure,
    AuthResult,
    AuthSuccess,
    Permission,
)
from flickr_oauth.transport import HttpxTransport

__version__ = "0.1.0"

__all__ = [
    # Main client
    "FlickrClient",
    "FlickrConfig",
    "FlickrOAuth",
    "HttpxTransport",
    # Secret stores
    "FileSecretStore",
    "MemorySecretStore",
    # Models
    "AuthErrorKind",
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "AuthenticatedUser",
    "Permission",
    # Exceptions
    "FlickrAPIError",
    "FlickrAuthError",
    "FlickrAuthorizationError",
    "FlickrCallbackNotConfirmedError",
    "FlickrConfigError",
    "FlickrError",
    "FlickrIncompleteUserError",
    "FlickrProtocolError",
    "FlickrRateLimitError",
    "FlickrStateError",
    "FlickrTokenError",
    "FlickrTransportError",
]
