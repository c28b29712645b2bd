"""SQLite data-source adapter."""

from __future__ import annotations

import sqlite3
from typing import Any

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite data source.

    Uses the built-in sqlite3 module and opens a fresh connection per
    acquisition. Suitable for:
    - Development and testing
    - Small single-host user stores

    ``:memory:`` gives every acquisition its own empty database, so a real
    file (or a ``file:...?mode=memory&cache=shared`` URI) is needed for data
    to survive between calls.
    """

    def __init__(
        self,
        path: str = ":memory:",
        *,
        readonly: bool = True,
        timeout: float = 5.0,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.SQLITE,
            path=path,
            readonly=readonly,
            options=kwargs,
        )
        super().__init__(config)
        self._timeout = timeout

    def _open(self) -> sqlite3.Connection:
        path = self.config.path or ":memory:"
        uri = path.startswith("file:")

        conn = sqlite3.connect(
            path,
            timeout=self._timeout,
            check_same_thread=False,
            uri=uri,
        )
        if self.config.readonly:
            conn.execute("PRAGMA query_only = ON")
        return conn


__all__ = [
    "SQLiteAdapter",
]
