"""
Root Typer application for the dbuser CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="dbuser",
    help="dbuser: read users and verify credentials in an existing database.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("dbuser-provider")
        except PackageNotFoundError:
            from dbuser import __version__ as v
        typer.echo(f"dbuser {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """dbuser CLI: users, credentials and pagination SQL."""


# ── Sub-command registration ─────────────────────────────────────────────

from dbuser.cli.credentials import app as credentials_app  # noqa: E402
from dbuser.cli.sql import app as sql_app  # noqa: E402
from dbuser.cli.users import app as users_app  # noqa: E402

app.add_typer(users_app, name="users", help="List, count and look up users.")
app.add_typer(credentials_app, name="credentials", help="Verify stored credentials.")
app.add_typer(sql_app, name="sql", help="Preview generated SQL.")


if __name__ == "__main__":
    app()
