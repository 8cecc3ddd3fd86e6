"""REST API commands."""

import typer

from flickr_oauth.cli.async_runner import async_command
from flickr_oauth.cli.client_factory import get_client
from flickr_oauth.cli.config import CLIConfig, OutputFormat
from flickr_oauth.cli.formatters import console, format_output

app = typer.Typer(no_args_is_help=True)


def _parse_args(args: list[str] | None) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a dict."""
    params: dict[str, str] = {}
    for arg in args or []:
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {arg!r}", param_hint="--arg")
        params[key] = value
    return params


_ARG_OPTION = typer.Option(
    None,
    "--arg",
    "-a",
    help="Request parameter as key=value (repeatable).",
)


@app.command("whoami")
@async_command
async def whoami(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Verify the stored token with flickr.test.login."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        identity = await client.api.test_login()

    format_output(identity, output, title="Flickr Account")


@app.command("call")
@async_command
async def call(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="Flickr method, e.g. flickr.photos.search."),
    args: list[str] | None = _ARG_OPTION,
    post: bool = typer.Option(False, "--post", help="Send as POST (write methods)."),
    output: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Call a Flickr REST API method with a signed request."""
    config: CLIConfig = ctx.obj
    params = _parse_args(args)

    async with get_client(config) as client:
        data = await client.api.call(method, params, http_method="POST" if post else "GET")

    format_output(data, output, title=method)


@app.command("sign")
@async_command
async def sign(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Endpoint URL without query string."),
    args: list[str] | None = _ARG_OPTION,
    http_method: str = typer.Option("GET", "--method", "-X", help="HTTP method."),
) -> None:
    """Print a signed URL for the given endpoint and parameters."""
    config: CLIConfig = ctx.obj
    params = _parse_args(args)

    async with get_client(config) as client:
        signed = client.auth.build_signed_url(http_method.upper(), url, params)

    console.print(signed, soft_wrap=True, markup=False, highlight=False)
