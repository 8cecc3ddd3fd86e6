"""Main Typer application."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from flickr_oauth.cli.config import CLIConfig, _default_config_dir, _default_data_dir
from flickr_oauth.cli.formatters import error_console

# Create main app
app = typer.Typer(
    name="flickr-oauth",
    help="Flickr OAuth command-line interface.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Config directory (default: ~/.config/flickr-oauth).",
        envvar="FLICKR_OAUTH_CONFIG_DIR",
    ),
    data_dir: Path | None = typer.Option(
        None,
        "--data-dir",
        help="Token directory (default: ~/.local/share/flickr-oauth).",
        envvar="FLICKR_OAUTH_DATA_DIR",
    ),
) -> None:
    """Flickr OAuth command-line interface."""
    _configure_logging(verbose)
    ctx.obj = CLIConfig(
        verbose=verbose,
        config_dir=config_dir or _default_config_dir(),
        data_dir=data_dir or _default_data_dir(),
    )
