"""CLI configuration with XDG-compliant paths and environment variable overrides."""

import json
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from flickr_oauth.config import DEFAULT_CALLBACK_URL, FlickrConfig
from flickr_oauth.exceptions import FlickrConfigError


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _default_config_dir() -> Path:
    """Get XDG-compliant config directory for credentials.

    Uses XDG_CONFIG_HOME if set, otherwise ~/.config/flickr-oauth.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "flickr-oauth"
    return Path.home() / ".config" / "flickr-oauth"


def _default_data_dir() -> Path:
    """Get XDG-compliant data directory for tokens.

    Uses XDG_DATA_HOME if set, otherwise ~/.local/share/flickr-oauth.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "flickr-oauth"
    return Path.home() / ".local" / "share" / "flickr-oauth"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Directory Structure:
        config_dir/
        └── config.json     # consumer_key, consumer_secret, callback_url

        data_dir/
        └── tokens.json     # OAuth access token and signed-in user
    """

    verbose: bool = False
    config_dir: Path = field(default_factory=_default_config_dir)
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def token_path(self) -> Path:
        return self.data_dir / "tokens.json"

    @property
    def credentials_path(self) -> Path:
        return self.config_dir / "config.json"

    def load_config(self) -> FlickrConfig:
        """Load credentials from config file with environment variable overrides.

        Environment variables:
        - FLICKR_CONSUMER_KEY: Overrides consumer_key from file
        - FLICKR_CONSUMER_SECRET: Overrides consumer_secret from file
        - FLICKR_CALLBACK_URL: Overrides callback_url from file

        Raises:
            FlickrConfigError: If credentials cannot be determined
        """
        data: dict[str, str] = {}

        if self.credentials_path.exists():
            try:
                with self.credentials_path.open() as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                msg = f"Failed to read {self.credentials_path}: {e}"
                raise FlickrConfigError(msg) from e

        consumer_key = os.environ.get("FLICKR_CONSUMER_KEY") or data.get("consumer_key")
        consumer_secret = os.environ.get("FLICKR_CONSUMER_SECRET") or data.get("consumer_secret")
        callback_url = os.environ.get("FLICKR_CALLBACK_URL") or data.get("callback_url")

        if not consumer_key or not consumer_secret:
            missing = [
                name
                for name, value in (
                    ("consumer_key", consumer_key),
                    ("consumer_secret", consumer_secret),
                )
                if not value
            ]
            msg = (
                f"Missing credentials: {', '.join(missing)}. "
                f"Set via environment variables (FLICKR_CONSUMER_KEY, FLICKR_CONSUMER_SECRET) "
                f"or create config file at {self.credentials_path}"
            )
            raise FlickrConfigError(msg)

        return FlickrConfig(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            callback_url=callback_url or DEFAULT_CALLBACK_URL,
        )

    def save_credentials(
        self,
        consumer_key: str,
        consumer_secret: str,
        callback_url: str = DEFAULT_CALLBACK_URL,
    ) -> None:
        """Save credentials to the config file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "consumer_key": consumer_key,
            "consumer_secret": consumer_secret,
            "callback_url": callback_url,
        }

        with self.credentials_path.open("w") as f:
            json.dump(data, f, indent=2)

        # Set restrictive permissions (owner read/write only)
        self.credentials_path.chmod(0o600)
