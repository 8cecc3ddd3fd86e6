"""Output formatters for CLI commands."""

import json
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from flickr_oauth.cli.config import OutputFormat

console = Console()
error_console = Console(stderr=True)


def format_output(
    data: BaseModel | dict[str, Any],
    output_format: OutputFormat,
    *,
    title: str | None = None,
) -> None:
    """Print a model or dict as a two-column table or as JSON."""
    converted = data.model_dump() if isinstance(data, BaseModel) else data

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(converted, default=str))
    else:
        _format_table(converted, title)


def _snake_to_title(s: str) -> str:
    """Convert snake_case to Title Case for table headers."""
    return " ".join(word.capitalize() for word in s.split("_"))


def _format_table(data: dict[str, Any], title: str | None) -> None:
    if not data:
        console.print("[dim]No data[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")

    for key, value in data.items():
        rendered = json.dumps(value, default=str) if isinstance(value, dict | list) else str(value)
        table.add_row(_snake_to_title(key), rendered)

    console.print(table)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
