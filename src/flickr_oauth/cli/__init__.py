"""Flickr OAuth CLI - Command-line interface for the Flickr OAuth client."""

from flickr_oauth.cli.app import app

# Import command modules to register them with the app
from flickr_oauth.cli.commands import api, auth

# Register sub-apps
app.add_typer(auth.app, name="auth", help="Authentication commands.")
app.add_typer(api.app, name="api", help="Signed REST API calls.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
