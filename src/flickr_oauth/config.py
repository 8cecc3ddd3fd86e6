"""Configuration management for Flickr OAuth client."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from flickr_oauth.exceptions import FlickrConfigError


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "flickr-oauth"
    return Path.home() / ".config" / "flickr-oauth"


DEFAULT_CALLBACK_URL = "flickr-oauth://oauth-callback"


@dataclass(frozen=True, slots=True)
class FlickrConfig:
    """Flickr application credentials and endpoints.

    Credentials are immutable and outlive any number of OAuth flows.
    """

    consumer_key: str
    consumer_secret: str
    callback_url: str = DEFAULT_CALLBACK_URL

    # Endpoint URLs
    oauth_base_url: str = field(default="https://www.flickr.com/services/oauth", repr=False)
    rest_url: str = field(default="https://api.flickr.com/services/rest", repr=False)

    @property
    def request_token_url(self) -> str:
        return f"{self.oauth_base_url}/request_token"

    @property
    def authorize_url(self) -> str:
        return f"{self.oauth_base_url}/authorize"

    @property
    def access_token_url(self) -> str:
        return f"{self.oauth_base_url}/access_token"

    @classmethod
    def from_env(cls) -> FlickrConfig:
        """Create config from environment variables.

        Expected env vars:
        - FLICKR_CONSUMER_KEY
        - FLICKR_CONSUMER_SECRET
        - FLICKR_CALLBACK_URL (optional)
        """
        consumer_key = os.environ.get("FLICKR_CONSUMER_KEY")
        consumer_secret = os.environ.get("FLICKR_CONSUMER_SECRET")

        if not consumer_key or not consumer_secret:
            msg = (
                "Missing required environment variables: "
                "FLICKR_CONSUMER_KEY and FLICKR_CONSUMER_SECRET"
            )
            raise FlickrConfigError(msg)

        return cls(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            callback_url=os.environ.get("FLICKR_CALLBACK_URL") or DEFAULT_CALLBACK_URL,
        )

    @classmethod
    def from_file(cls, path: Path | None = None) -> FlickrConfig:
        """Load config from JSON file.

        Default path: ~/.config/flickr-oauth/config.json

        Expected format:
        {
            "consumer_key": "...",
            "consumer_secret": "...",
            "callback_url": "..."
        }
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FlickrConfigError(msg)

        try:
            with path.open() as f:
                data = json.load(f)
            return cls(
                consumer_key=data["consumer_key"],
                consumer_secret=data["consumer_secret"],
                callback_url=data.get("callback_url") or DEFAULT_CALLBACK_URL,
            )
        except (json.JSONDecodeError, KeyError) as e:
            msg = f"Invalid config file {path}: {e}"
            raise FlickrConfigError(msg) from e

    @classmethod
    def load(cls) -> FlickrConfig:
        """Load config from environment or file (env takes precedence)."""
        try:
            return cls.from_env()
        except FlickrConfigError:
            return cls.from_file()
