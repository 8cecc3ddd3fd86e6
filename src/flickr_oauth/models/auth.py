"""OAuth token, user and result models."""

from enum import StrEnum
from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field


class Permission(StrEnum):
    """Permission level requested from the user."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"


class FlowStage(StrEnum):
    """Stage of an in-flight OAuth flow."""

    REQUEST_TOKEN = "request_token"
    ACCESS_TOKEN = "access_token"
    IDLE = "idle"


class AuthErrorKind(StrEnum):
    """Kinds of terminal OAuth flow failures."""

    TRANSPORT = "transport_failure"
    PROTOCOL = "protocol_failure"
    UNCONFIRMED_CALLBACK = "unconfirmed_callback"
    INCOMPLETE_USER_DATA = "incomplete_user_data"
    AUTHORIZATION_DECLINED = "authorization_declined"
    NOT_AUTHENTICATED = "not_authenticated"


class AuthenticatedUser(BaseModel):
    """Flickr account that completed the OAuth flow."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(description="Flickr NSID")
    username: str = Field(description="Flickr screen name")
    fullname: str = Field(default="", description="Display name")


class RequestToken(BaseModel):
    """OAuth request token (first step of OAuth flow)."""

    token: str = Field(description="Request token value")
    token_secret: str = Field(description="Request token secret")


class AccessToken(BaseModel):
    """OAuth access token (final step of OAuth flow)."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(description="Access token value")
    token_secret: str = Field(description="Access token secret")


class AuthSuccess(BaseModel):
    """Completed OAuth flow."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    token: str
    token_secret: str
    user: AuthenticatedUser


class AuthFailure(BaseModel):
    """Failed OAuth flow with a human-readable reason."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: AuthErrorKind
    message: str


AuthResult: TypeAlias = AuthSuccess | AuthFailure
