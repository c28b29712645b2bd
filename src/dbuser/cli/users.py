"""
CLI: ``dbuser users`` -- user listing and lookup.
"""

from __future__ import annotations

import typer

from dbuser.cli.utils import console, fail, make_repository, output_result
from dbuser.core.errors import DBUserError
from dbuser.core.paging import Pageable

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_users(
    search: str | None = typer.Option(None, "--search", "-s", help="Substring to match"),
    first: int | None = typer.Option(None, "--first", help="Rows to skip"),
    max_rows: int | None = typer.Option(None, "--max", "-n", help="Page size"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List users, optionally filtered and paged."""
    pageable = None
    if first is not None or max_rows is not None:
        try:
            pageable = Pageable(
                first=first if first is not None else 0,
                max=max_rows if max_rows is not None else 100,
            )
        except DBUserError as e:
            fail(e)

    repository = make_repository()
    result = repository.find_users(search, pageable)
    output_result(result, as_json=json_out, title="Users")


@app.command()
def count(
    search: str | None = typer.Option(None, "--search", "-s", help="Substring to match"),
) -> None:
    """Count users, or users matching ``--search``."""
    repository = make_repository()
    result = repository.get_users_count(search)
    if result.is_err():
        fail(result.error)
    console.print(result.unwrap())


@app.command("show")
def show_user(
    user_id: str | None = typer.Option(None, "--id", help="Integer user id"),
    username: str | None = typer.Option(None, "--username", "-u"),
    email: str | None = typer.Option(None, "--email", "-e"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one user, looked up by exactly one of id, username or email."""
    given = [v for v in (user_id, username, email) if v is not None]
    if len(given) != 1:
        raise typer.BadParameter("Give exactly one of --id, --username, --email")

    repository = make_repository()
    if user_id is not None:
        result = repository.find_user_by_id(user_id)
    elif username is not None:
        result = repository.find_user_by_username(username)
    else:
        result = repository.find_user_by_email(email)

    if result.is_ok() and result.unwrap() is None:
        console.print("[dim]Not found.[/dim]")
        raise typer.Exit(code=1)
    output_result(result, as_json=json_out, title=f"User: {given[0]}")
