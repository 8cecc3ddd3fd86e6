"""Terminal-based user authorization."""

import webbrowser

import typer

from flickr_oauth.cli.formatters import console, print_info
from flickr_oauth.exceptions import FlickrAuthorizationError


class ConsoleAuthorizer:
    """Sends the user to Flickr in a browser and reads back the callback URL.

    After approving access Flickr redirects to the registered callback URL;
    the user pastes that URL (with its oauth_verifier) into the terminal.
    """

    def __init__(self, *, open_browser: bool = True) -> None:
        self.open_browser = open_browser

    async def present(self, authorization_url: str, callback_url: str) -> str:
        if self.open_browser:
            print_info("Opening browser for authorization...")
            webbrowser.open(authorization_url)
            console.print("\n[dim]If browser didn't open, visit:[/dim]")
        else:
            console.print("\nOpen this URL in your browser:")
        console.print(f"[link]{authorization_url}[/link]")

        console.print()
        try:
            redirected = typer.prompt(
                f"Paste the URL you were redirected to (starts with {callback_url})",
                default="",
                show_default=False,
            )
        except typer.Abort as e:
            raise FlickrAuthorizationError("Authorization cancelled", stage="authorize") from e

        redirected = redirected.strip()
        if not redirected:
            raise FlickrAuthorizationError("Authorization cancelled", stage="authorize")
        return redirected
