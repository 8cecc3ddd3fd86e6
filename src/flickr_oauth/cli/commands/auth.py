"""Authentication commands."""

import typer

from flickr_oauth.auth import FileSecretStore
from flickr_oauth.auth.tokens import clear_access_token, clear_user, load_access_token, load_user
from flickr_oauth.cli.async_runner import async_command
from flickr_oauth.cli.authorizer import ConsoleAuthorizer
from flickr_oauth.cli.client_factory import get_client
from flickr_oauth.cli.config import CLIConfig
from flickr_oauth.cli.formatters import console, print_error, print_info, print_success
from flickr_oauth.models.auth import AuthFailure, Permission

app = typer.Typer(no_args_is_help=True)


@app.command("login")
@async_command
async def login(
    ctx: typer.Context,
    perms: Permission = typer.Option(
        Permission.READ,
        "--perms",
        "-p",
        help="Permission level to request.",
    ),
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Don't open browser automatically.",
    ),
) -> None:
    """Authenticate with Flickr OAuth.

    This command runs the OAuth flow:
    1. Gets a request token
    2. Opens browser for Flickr authorization
    3. Prompts for the callback URL and exchanges it for an access token
    """
    config: CLIConfig = ctx.obj
    authorizer = ConsoleAuthorizer(open_browser=not no_browser)

    async with get_client(config, authorizer=authorizer) as client:
        print_info(f"Requesting '{perms}' permission from Flickr...")
        result = await client.authenticate(perms)

    if isinstance(result, AuthFailure):
        print_error(result.message)
        raise typer.Exit(1)

    print_success(
        f"Authenticated as {result.user.username} ({result.user.user_id}). "
        f"Token saved to {config.token_path}"
    )


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Check authentication status."""
    config: CLIConfig = ctx.obj
    store = FileSecretStore(path=config.token_path)

    console.print(f"Token path: {config.token_path}")

    if load_access_token(store) is None:
        print_info("Not authenticated - run 'flickr-oauth auth login' to authenticate")
        return

    user = load_user(store)
    if user is not None:
        print_success(f"Authenticated as {user.username} ({user.user_id})")
    else:
        print_success("Token found - you are authenticated")


@app.command("logout")
def logout(ctx: typer.Context) -> None:
    """Clear the saved token and user."""
    config: CLIConfig = ctx.obj
    store = FileSecretStore(path=config.token_path)

    if load_access_token(store) is None and load_user(store) is None:
        print_info("No token to clear.")
        return

    clear_access_token(store)
    clear_user(store)
    print_success("Logged out.")
