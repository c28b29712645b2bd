"""
Canonical protocol definitions for dbuser.

The query layer depends on shapes, not on drivers. Any DB-API 2.0
connection/cursor satisfies ``Connection``/``ResultCursor``; any object
with a ``connection()`` context manager is a ``DataSource``; anything
that can hand out an optional ``DataSource`` is a ``DataSourceProvider``.

Manifesto:
    Protocols define contracts without inheritance. They enable:
    - **Decoupling:** Row transformers never import sqlite3 or psycopg2
    - **Testability:** An in-memory fixture cursor works as well as a driver
    - **Portability:** The same repository runs on every supported engine

Architecture:
    ::

        protocols.py
        ├── ResultCursor        what a row transformer may touch
        ├── Connection          DB-API connection: cursor(), close()
        ├── DataSource          scoped connection acquisition
        └── DataSourceProvider  optional DataSource (None = unavailable)

Tags:
    protocol, connection, cursor, database, dbuser, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResultCursor(Protocol):
    """
    Opaque, forward-only result cursor.

    ``description`` follows DB-API 2.0: a sequence of 7-item sequences whose
    first item is the column label (``None`` before a query has run).
    Iterating yields the remaining rows as sequences.
    """

    @property
    def description(self) -> Sequence[Sequence[Any]] | None:
        ...

    def fetchone(self) -> Sequence[Any] | None:
        """Fetch the next row, or ``None`` when exhausted."""
        ...

    def __iter__(self) -> Iterator[Sequence[Any]]:
        ...


@runtime_checkable
class Cursor(ResultCursor, Protocol):
    """DB-API cursor: a ``ResultCursor`` that can also execute and be closed."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Any:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class Connection(Protocol):
    """Minimal SYNCHRONOUS DB-API connection used by the query executor."""

    def cursor(self) -> Cursor:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class DataSource(Protocol):
    """
    Scoped connection acquisition.

    ``connection()`` yields one connection and releases it (close or return to
    pool) when the ``with`` block exits, whatever the exit path.
    """

    def connection(self) -> AbstractContextManager[Connection]:
        ...


@runtime_checkable
class DataSourceProvider(Protocol):
    """Hands out the current data source; ``None`` means none is reachable."""

    def get_data_source(self) -> DataSource | None:
        ...


__all__ = [
    "ResultCursor",
    "Cursor",
    "Connection",
    "DataSource",
    "DataSourceProvider",
]
