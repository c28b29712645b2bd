"""
CLI layer for dbuser.

A Typer application for operators: list and look up users through the
configured queries, check a password against its stored hash, and preview
the page clause a dialect produces. All behaviour lives in
``dbuser.users`` and ``dbuser.core``; this package only parses arguments
and renders output.

Entry point::

    dbuser --help
"""

from dbuser.cli.app import app

__all__ = ["app"]
