"""Async command support for Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

import typer

from flickr_oauth.api import INVALID_TOKEN_CODES
from flickr_oauth.cli.formatters import print_error, print_info
from flickr_oauth.exceptions import FlickrAPIError, FlickrConfigError, FlickrTokenError


def _is_token_invalid_error(e: FlickrAPIError) -> bool:
    """Check if the error is due to a revoked or insufficient token."""
    if e.error_code in INVALID_TOKEN_CODES:
        return True
    msg = str(e.message).lower()
    return "invalid auth token" in msg or "token_rejected" in msg


T = TypeVar("T")


def async_command(f: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Decorator to run async Typer commands.

    Maps configuration and token errors to a friendly message and exit code 1.

    Usage:
        @app.command()
        @async_command
        async def my_command(ctx: typer.Context):
            async with get_client(ctx.obj) as client:
                result = await client.api.test_login()
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return asyncio.run(f(*args, **kwargs))
        except FlickrConfigError as e:
            print_error(e.message)
            raise typer.Exit(1) from None
        except FlickrTokenError:
            print_error("Not authenticated.")
            print_info("Run 'flickr-oauth auth login' to authenticate.")
            raise typer.Exit(1) from None
        except FlickrAPIError as e:
            if not _is_token_invalid_error(e):
                raise
            print_error("Your stored token was rejected by Flickr.")
            print_info("Run 'flickr-oauth auth login' to re-authenticate.")
            raise typer.Exit(1) from None

    return wrapper
