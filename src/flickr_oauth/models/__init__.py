"""Pydantic models for Flickr OAuth and API responses."""

from flickr_oauth.models.api import LoginIdentity
from flickr_oauth.models.auth import (
    AccessToken,
    AuthenticatedUser,
    AuthErrorKind,
    AuthFailure,
    AuthResult,
    AuthSuccess,
    FlowStage,
    Permission,
    RequestToken,
)

__all__ = [
    # Auth
    "AccessToken",
    "AuthErrorKind",
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "AuthenticatedUser",
    "FlowStage",
    "Permission",
    "RequestToken",
    # API
    "LoginIdentity",
]
