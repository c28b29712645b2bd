"""Oracle data-source adapter.

Uses ``oracledb`` (python-oracledb) in thin mode. Oracle templates use
**numeric** (``:1``, ``:2``) placeholders.

Install the driver::

    pip install dbuser-provider[oracle]

The driver is import-guarded: if ``oracledb`` is missing a
:class:`~dbuser.core.errors.ConfigError` is raised on first acquisition.
"""

from __future__ import annotations

from typing import Any

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class OracleAdapter(DatabaseAdapter):
    """Oracle data source; one connection per acquisition."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 1521,
        database: str = "",  # service name
        username: str | None = None,
        password: str | None = None,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.ORACLE,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            options=kwargs,
        )
        super().__init__(config)

    def _open(self) -> Any:
        oracledb = self._require("oracledb", "oracledb")
        dsn = oracledb.makedsn(
            self.config.host,
            self.config.port,
            service_name=self.config.database,
        )
        return oracledb.connect(
            user=self.config.username,
            password=self.config.password,
            dsn=dsn,
            **self.config.options,
        )


__all__ = [
    "OracleAdapter",
]
