"""Flickr REST API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class LoginIdentity(BaseModel):
    """Identity returned by flickr.test.login."""

    user_id: str = Field(description="Flickr NSID")
    username: str = Field(description="Flickr screen name")

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> LoginIdentity:
        """Parse from the flickr.test.login JSON payload.

        Flickr wraps scalar values as {"_content": "..."}.
        """
        user = data.get("user", {})
        username = user.get("username", {})
        if isinstance(username, dict):
            username = username.get("_content", "")
        return cls(user_id=user.get("id", ""), username=username)
