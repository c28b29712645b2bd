"""
CLI utility helpers: repository construction and output formatting.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from dbuser.core.adapters import StaticDataSourceProvider
from dbuser.core.errors import DBUserError
from dbuser.core.logging import configure_logging
from dbuser.core.result import Result
from dbuser.core.settings import get_settings
from dbuser.users.repository import UserRepository

console = Console()
err_console = Console(stderr=True)


# ── Repository helper ────────────────────────────────────────────────────


def make_repository() -> UserRepository:
    """Build a ``UserRepository`` from ``DBUSER_*`` settings.

    Configuration problems are reported on stderr and end the command with
    exit code 1.
    """
    try:
        settings = get_settings(_force_reload=True)
        configure_logging(level=settings.log_level, json_format=settings.log_json)
        config = settings.to_query_configuration()
        provider = StaticDataSourceProvider(settings.create_data_source())
        return UserRepository(provider, config)
    except (DBUserError, PydanticValidationError) as e:
        fail(e)


def fail(error: Exception) -> NoReturn:
    """Print ``error`` to stderr and exit 1."""
    if isinstance(error, DBUserError):
        err_console.print(
            f"[bold red]Error[/bold red] ({type(error).__name__}): {error.message}"
        )
    else:
        err_console.print(f"[bold red]Error[/bold red]: {error}")
    raise typer.Exit(code=1)


# ── Output helpers ───────────────────────────────────────────────────────


def output_result(
    result: Result[Any],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render a ``Result`` to the terminal, or exit 1 if it is an ``Err``."""
    if result.is_err():
        fail(result.error)

    data = result.unwrap()

    if as_json:
        console.print_json(json.dumps(data, default=str))
        return

    if data is None:
        console.print("[dim]Not found.[/dim]")
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No users.[/dim]")
            return
        _print_table(data, title=title)
    elif isinstance(data, dict):
        _print_dict(data, title=title)
    else:
        console.print(data)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(records: list[dict[str, Any]], *, title: str = "") -> None:
    """Render user records as a Rich table."""
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in records[0]:
        table.add_column(col, overflow="fold")
    for record in records:
        table.add_row(*("" if v is None else str(v) for v in record.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single record as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
