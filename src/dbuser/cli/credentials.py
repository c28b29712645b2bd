"""
CLI: ``dbuser credentials`` -- check a password against its stored hash.
"""

from __future__ import annotations

import typer

from dbuser.cli.utils import console, err_console, make_repository

app = typer.Typer(no_args_is_help=True)


@app.command()
def verify(
    username: str = typer.Argument(..., help="Username to check"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        help="Password (prompted when omitted)",
    ),
) -> None:
    """Exit 0 when the password matches the stored credential, 1 otherwise."""
    repository = make_repository()
    if repository.validate_credentials(username, password):
        console.print("[green]Credentials valid.[/green]")
        return
    err_console.print("[red]Credentials invalid.[/red]")
    raise typer.Exit(code=1)
