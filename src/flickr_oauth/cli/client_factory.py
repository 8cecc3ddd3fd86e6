"""Client factory for CLI commands."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from flickr_oauth.auth import FileSecretStore
from flickr_oauth.client import FlickrClient

if TYPE_CHECKING:
    from flickr_oauth.auth import AuthorizationSurface
    from flickr_oauth.cli.config import CLIConfig


@asynccontextmanager
async def get_client(
    config: CLIConfig,
    authorizer: AuthorizationSurface | None = None,
) -> AsyncGenerator[FlickrClient]:
    """Create and configure a FlickrClient for CLI use.

    This context manager:
    1. Loads credentials from config file with env var overrides
    2. Uses the CLI token file (XDG_DATA_HOME) as secret store
    3. Manages connection pooling lifecycle

    Usage:
        async with get_client(cli_config) as client:
            result = await client.api.test_login()
    """
    flickr_config = config.load_config()
    secret_store = FileSecretStore(path=config.token_path)

    client = FlickrClient(flickr_config, secret_store=secret_store, authorizer=authorizer)

    async with client:
        yield client
