"""Typed exceptions for Flickr OAuth client."""

from typing import Any

from flickr_oauth.models.auth import AuthErrorKind


class FlickrError(Exception):
    """Base exception for all Flickr client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class FlickrConfigError(FlickrError):
    """Missing or invalid credentials."""


class FlickrStateError(FlickrError):
    """Illegal OAuth flow stage transition."""


class FlickrAuthError(FlickrError):
    """Authentication flow error.

    Every subclass maps to one AuthErrorKind; all of them end the flow.
    """

    kind: AuthErrorKind = AuthErrorKind.PROTOCOL

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        self.stage = stage  # e.g., "request_token", "authorize", "access_token"
        super().__init__(message)


class FlickrTransportError(FlickrAuthError):
    """Network failure or HTTP error status."""

    kind = AuthErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, stage=stage)


class FlickrProtocolError(FlickrAuthError):
    """Malformed or undecodable response."""

    kind = AuthErrorKind.PROTOCOL


class FlickrCallbackNotConfirmedError(FlickrAuthError):
    """Server did not confirm the OAuth callback."""

    kind = AuthErrorKind.UNCONFIRMED_CALLBACK


class FlickrIncompleteUserError(FlickrAuthError):
    """Access token response lacks required user fields."""

    kind = AuthErrorKind.INCOMPLETE_USER_DATA


class FlickrAuthorizationError(FlickrAuthError):
    """User declined authorization or the authorization surface failed."""

    kind = AuthErrorKind.AUTHORIZATION_DECLINED


class FlickrTokenError(FlickrAuthError):
    """No stored access token."""

    kind = AuthErrorKind.NOT_AUTHENTICATED

    def __init__(self, message: str = "Not authenticated. Complete OAuth flow first.") -> None:
        super().__init__(message, stage="token_validation")


class FlickrAPIError(FlickrError):
    """REST API error with status code and Flickr error code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_code: str | None = None,
        response_body: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.response_body = response_body
        super().__init__(message)


class FlickrRateLimitError(FlickrAPIError):
    """Rate limit exceeded - includes retry information."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 429,
        retry_after: int | None = None,
    ) -> None:
        self.retry_after = retry_after  # seconds until retry is allowed
        super().__init__(message, status_code=status_code)
