"""PostgreSQL data-source adapter.

Uses ``psycopg2``. PostgreSQL templates use **format** (``%s``)
placeholders.

Install the driver::

    pip install dbuser-provider[postgresql]

The driver is import-guarded: if ``psycopg2`` is missing a
:class:`~dbuser.core.errors.ConfigError` is raised on first acquisition.
"""

from __future__ import annotations

from typing import Any

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL data source; one psycopg2 connection per acquisition."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        ssl_mode: str = "prefer",
        readonly: bool = True,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.POSTGRESQL,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            readonly=readonly,
            options={**kwargs, "sslmode": ssl_mode},
        )
        super().__init__(config)

    def _open(self) -> Any:
        psycopg2 = self._require("psycopg2", "psycopg2-binary")
        conn = psycopg2.connect(
            host=self.config.host,
            port=self.config.port,
            dbname=self.config.database,
            user=self.config.username,
            password=self.config.password,
            connect_timeout=self.config.connect_timeout,
            **self.config.options,
        )
        conn.set_session(readonly=self.config.readonly, autocommit=True)
        return conn


__all__ = [
    "PostgreSQLAdapter",
]
