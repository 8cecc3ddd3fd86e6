"""OAuth 1.0a authentication for the Flickr API."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Protocol, TypeAlias

from flickr_oauth.auth import signing
from flickr_oauth.auth.session import AuthSession
from flickr_oauth.auth.tokens import (
    clear_access_token,
    clear_user,
    load_access_token,
    load_user,
    save_access_token,
    save_user,
)
from flickr_oauth.exceptions import (
    FlickrAuthError,
    FlickrAuthorizationError,
    FlickrCallbackNotConfirmedError,
    FlickrIncompleteUserError,
    FlickrProtocolError,
    FlickrTokenError,
    FlickrTransportError,
)
from flickr_oauth.models.auth import (
    AccessToken,
    AuthenticatedUser,
    AuthFailure,
    AuthResult,
    AuthSuccess,
    Permission,
    RequestToken,
)

if TYPE_CHECKING:
    from flickr_oauth.auth.tokens import SecretStore
    from flickr_oauth.config import FlickrConfig
    from flickr_oauth.transport import HttpTransport

logger = logging.getLogger(__name__)

CompletionHandler: TypeAlias = Callable[[AuthResult], None]


class AuthorizationSurface(Protocol):
    """Obtains user consent for a request token.

    Returns the callback URL carrying the verifier, or raises
    FlickrAuthorizationError if the user declines.
    """

    async def present(self, authorization_url: str, callback_url: str) -> str: ...


class FlickrOAuth:
    """OAuth 1.0a authentication handler for the Flickr API.

    Implements the three-legged flow:
    1. Get request token
    2. User authorization (via the injected AuthorizationSurface)
    3. Exchange verifier for access token

    Once authenticated, build_signed_url() signs API calls with the stored
    access token.
    """

    def __init__(
        self,
        config: FlickrConfig,
        *,
        transport: HttpTransport,
        secret_store: SecretStore,
        authorizer: AuthorizationSurface | None = None,
        callback_loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.config = config
        self.transport = transport
        self.secret_store = secret_store
        self.authorizer = authorizer
        self.callback_loop = callback_loop

    @property
    def is_authenticated(self) -> bool:
        """Check if an access token pair is stored."""
        return load_access_token(self.secret_store) is not None

    @property
    def current_user(self) -> AuthenticatedUser | None:
        """User from the last successful flow, if any."""
        return load_user(self.secret_store)

    def stored_token(self) -> AccessToken | None:
        return load_access_token(self.secret_store)

    def logout(self) -> None:
        """Forget the stored access token and user."""
        clear_access_token(self.secret_store)
        clear_user(self.secret_store)
        logger.info("Cleared stored Flickr credentials")

    async def authenticate(
        self,
        permission: Permission = Permission.READ,
        on_complete: CompletionHandler | None = None,
    ) -> AuthResult:
        """Run the full OAuth flow.

        Any stored access token is cleared first. Failures never raise; they
        are returned (and delivered to ``on_complete``) as AuthFailure.

        Args:
            permission: Permission level to request from the user
            on_complete: Called exactly once with the result

        Returns:
            AuthSuccess or AuthFailure
        """
        clear_access_token(self.secret_store)
        clear_user(self.secret_store)

        session = AuthSession(permission=Permission(permission))
        try:
            result: AuthResult = await self._run_flow(session)
        except FlickrAuthError as e:
            session.fail()
            logger.warning("Failed to authorize with Flickr (%s): %s", e.stage, e.message)
            result = AuthFailure(kind=e.kind, message=e.message)

        self._deliver(result, on_complete)
        return result

    def build_signed_url(
        self,
        http_method: str,
        base_url: str,
        extra_params: Mapping[str, str] | None = None,
    ) -> str:
        """Sign an API request with the stored access token.

        Args:
            http_method: HTTP method (GET, POST)
            base_url: Endpoint URL without query string
            extra_params: Request parameters to include and sign

        Returns:
            The signed URL

        Raises:
            FlickrTokenError: If no access token is stored
        """
        access_token = load_access_token(self.secret_store)
        if access_token is None:
            raise FlickrTokenError()

        params = self._build_oauth_params()
        if extra_params:
            params.update({k: str(v) for k, v in extra_params.items()})
        params["oauth_token"] = access_token.token

        return signing.build_signed_url(
            http_method,
            base_url,
            params,
            consumer_secret=self.config.consumer_secret,
            token_secret=access_token.token_secret,
        )

    async def _run_flow(self, session: AuthSession) -> AuthSuccess:
        await self._get_request_token(session)
        callback_url = await self._authorize(session)
        verifier = signing.extract_verifier(callback_url)
        return await self._get_access_token(session, verifier)

    async def _get_request_token(self, session: AuthSession) -> None:
        """Step 1: Get a request token to start OAuth flow."""
        params = self._build_oauth_params()
        params["oauth_callback"] = self.config.callback_url

        data = await self._fetch_params(self.config.request_token_url, params, session)

        if not signing.parse_bool(data.get("oauth_callback_confirmed")):
            raise FlickrCallbackNotConfirmedError(
                "Failed to get a request token. OAuth status is not confirmed.",
                stage="request_token",
            )

        token = data.get("oauth_token", "")
        token_secret = data.get("oauth_token_secret", "")
        if not token or not token_secret:
            raise FlickrProtocolError("Invalid request token response", stage="request_token")

        session.set_request_token(RequestToken(token=token, token_secret=token_secret))
        logger.debug("Obtained request token")

    async def _authorize(self, session: AuthSession) -> str:
        """Step 2: Ask the user to authorize the request token."""
        if self.authorizer is None:
            raise FlickrProtocolError("No authorization surface configured", stage="authorize")

        request_token = session.request_token
        if request_token is None:
            raise FlickrProtocolError("No request token to authorize", stage="authorize")

        authorization_url = (
            f"{self.config.authorize_url}"
            f"?oauth_token={request_token.token}&perms={session.permission}"
        )
        try:
            return await self.authorizer.present(authorization_url, self.config.callback_url)
        except FlickrAuthError as e:
            e.stage = e.stage or "authorize"
            raise
        except Exception as e:
            raise FlickrAuthorizationError(
                f"Authorization failed: {e}", stage="authorize"
            ) from e

    async def _get_access_token(self, session: AuthSession, verifier: str) -> AuthSuccess:
        """Step 3: Exchange verifier code for access token."""
        params = self._build_oauth_params()
        params["oauth_token"] = session.request_token.token if session.request_token else ""
        params["oauth_verifier"] = verifier

        data = await self._fetch_params(self.config.access_token_url, params, session)

        user_id = data.get("user_nsid", "")
        username = data.get("username", "")
        fullname = data.get("fullname")
        token = data.get("oauth_token", "")
        token_secret = data.get("oauth_token_secret", "")

        if not user_id or not username or fullname is None or not token or not token_secret:
            raise FlickrIncompleteUserError(
                "Failed to get an access token.",
                stage="access_token",
            )

        user = AuthenticatedUser(user_id=user_id, username=username, fullname=fullname)
        session.complete(AccessToken(token=token, token_secret=token_secret))
        access_token = session.access_token

        save_access_token(self.secret_store, access_token)
        save_user(self.secret_store, user)
        logger.info("Authenticated with Flickr as %s", username)

        return AuthSuccess(
            token=access_token.token,
            token_secret=access_token.token_secret,
            user=user,
        )

    async def _fetch_params(
        self,
        url: str,
        params: dict[str, str],
        session: AuthSession,
    ) -> dict[str, str]:
        signed_url = signing.build_signed_url(
            "GET",
            url,
            params,
            consumer_secret=self.config.consumer_secret,
            token_secret=session.signing_secret,
        )

        try:
            body = await self.transport.fetch(signed_url, "GET")
        except FlickrAuthError as e:
            e.stage = e.stage or str(session.stage)
            raise
        except Exception as e:
            raise FlickrTransportError(
                f"Connection failed: {e}", stage=str(session.stage)
            ) from e

        try:
            return signing.parse_response_params(body)
        except FlickrAuthError as e:
            e.stage = e.stage or str(session.stage)
            raise

    def _build_oauth_params(self) -> dict[str, str]:
        """Build base OAuth parameters."""
        return {
            "oauth_nonce": str(uuid.uuid4()).upper(),
            "oauth_timestamp": str(int(time.time())),
            "oauth_consumer_key": self.config.consumer_key,
            "oauth_signature_method": signing.SIGNATURE_METHOD,
            "oauth_version": signing.OAUTH_VERSION,
        }

    def _deliver(self, result: AuthResult, on_complete: CompletionHandler | None) -> None:
        if on_complete is None:
            return

        loop = self.callback_loop
        if loop is not None and loop is not _running_loop():
            loop.call_soon_threadsafe(on_complete, result)
        else:
            on_complete(result)


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


__all__ = ["AuthorizationSurface", "CompletionHandler", "FlickrOAuth"]
