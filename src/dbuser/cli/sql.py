"""
CLI: ``dbuser sql`` -- preview the SQL a dialect generates.
"""

from __future__ import annotations

import typer

from dbuser.cli.utils import fail
from dbuser.core.dialect import supported_dialects
from dbuser.core.errors import DBUserError
from dbuser.core.paging import Pageable, format_with_pageable

app = typer.Typer(no_args_is_help=True)


@app.command()
def paginate(
    query: str = typer.Argument(..., help="SQL statement to bound"),
    dialect: str = typer.Option("postgresql", "--dialect", "-d"),
    first: int = typer.Option(0, "--first"),
    max_rows: int = typer.Option(100, "--max", "-n"),
) -> None:
    """Print QUERY rewritten to return one page of rows."""
    try:
        sql = format_with_pageable(query, Pageable(first=first, max=max_rows), dialect)
    except DBUserError as e:
        fail(e)
    typer.echo(sql)


@app.command()
def dialects() -> None:
    """List supported dialect tags."""
    for name in supported_dialects():
        typer.echo(name)
