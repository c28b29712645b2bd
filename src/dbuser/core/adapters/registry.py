"""Data-source factory and providers.

``DBUserSettings.create_data_source()`` names an engine (``DBUSER_DB_TYPE``)
and ``get_adapter()`` turns that name into a configured adapter. A provider
then hands the adapter to the query executor, or ``None`` when no database is
configured.
"""

from __future__ import annotations

from typing import Any

from dbuser.core.errors import ConfigError
from dbuser.core.protocols import DataSource

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .oracle import OracleAdapter
from .postgresql import PostgreSQLAdapter
from .sqlite import SQLiteAdapter

# Engine name (DBUSER_DB_TYPE) -> adapter class.
_ADAPTERS: dict[str, type[DatabaseAdapter]] = {
    "sqlite": SQLiteAdapter,
    "postgresql": PostgreSQLAdapter,
    "postgres": PostgreSQLAdapter,
    "mysql": MySQLAdapter,
    "mariadb": MySQLAdapter,
    "oracle": OracleAdapter,
}


def get_adapter(db_type: str, **kwargs: Any) -> DatabaseAdapter:
    """Build the adapter for ``db_type`` (case-insensitive).

    Raises:
        ConfigError: If no adapter handles ``db_type``.
    """
    key = db_type.lower().strip()
    if key not in _ADAPTERS:
        raise ConfigError(
            f"Unknown database adapter '{db_type}'. Supported: {sorted(_ADAPTERS)}"
        )
    return _ADAPTERS[key](**kwargs)


class StaticDataSourceProvider:
    """Always hands out the same data source (or ``None``: unavailable)."""

    def __init__(self, data_source: DataSource | None):
        self._data_source = data_source

    def get_data_source(self) -> DataSource | None:
        return self._data_source


__all__ = [
    "get_adapter",
    "StaticDataSourceProvider",
]
