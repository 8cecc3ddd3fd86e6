"""Per-flow OAuth session state."""

from dataclasses import dataclass

from flickr_oauth.exceptions import FlickrStateError
from flickr_oauth.models.auth import AccessToken, FlowStage, Permission, RequestToken

# Allowed forward transitions. Any stage may drop to IDLE on failure.
_NEXT_STAGE: dict[FlowStage, FlowStage] = {
    FlowStage.REQUEST_TOKEN: FlowStage.ACCESS_TOKEN,
    FlowStage.ACCESS_TOKEN: FlowStage.IDLE,
}


@dataclass
class AuthSession:
    """Mutable state for one authenticate() call.

    Created fresh for every flow and discarded once the result is delivered.
    """

    permission: Permission
    stage: FlowStage = FlowStage.REQUEST_TOKEN
    request_token: RequestToken | None = None
    access_token: AccessToken | None = None
    failed: bool = False

    def set_request_token(self, token: RequestToken) -> None:
        self._require(FlowStage.REQUEST_TOKEN)
        self.request_token = token
        self._advance()

    def complete(self, token: AccessToken) -> None:
        self._require(FlowStage.ACCESS_TOKEN)
        self.access_token = token
        self._advance()

    def fail(self) -> None:
        self.stage = FlowStage.IDLE
        self.failed = True

    @property
    def signing_secret(self) -> str:
        """Token secret used to sign the current step's request."""
        if self.stage is FlowStage.ACCESS_TOKEN and self.request_token is not None:
            return self.request_token.token_secret
        return ""

    def _require(self, stage: FlowStage) -> None:
        if self.stage is not stage:
            raise FlickrStateError(f"Expected stage {stage}, session is at {self.stage}")

    def _advance(self) -> None:
        self.stage = _NEXT_STAGE[self.stage]
