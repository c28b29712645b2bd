"""MySQL / MariaDB data-source adapter.

Uses ``mysql.connector`` from the ``mysql-connector-python`` package.
MySQL templates use **format** (``%s``) placeholders.

Install the driver::

    pip install dbuser-provider[mysql]

The driver is import-guarded: if ``mysql.connector`` is missing a
:class:`~dbuser.core.errors.ConfigError` is raised on first acquisition.
"""

from __future__ import annotations

from typing import Any

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class MySQLAdapter(DatabaseAdapter):
    """MySQL / MariaDB data source; one connection per acquisition."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3306,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        charset: str = "utf8mb4",
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.MYSQL,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            options={**kwargs, "charset": charset},
        )
        super().__init__(config)

    def _open(self) -> Any:
        connector = self._require("mysql.connector", "mysql-connector-python")
        return connector.connect(
            host=self.config.host,
            port=self.config.port,
            database=self.config.database,
            user=self.config.username,
            password=self.config.password,
            connection_timeout=self.config.connect_timeout,
            autocommit=True,
            **self.config.options,
        )


__all__ = [
    "MySQLAdapter",
]
