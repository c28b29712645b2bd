"""Data-source adapters -- one interface for every supported engine.

Manifesto:
    The user table can live in SQLite, PostgreSQL, MySQL/MariaDB or Oracle.
    Each adapter opens exactly one driver connection per acquisition and
    closes it when the ``with`` block ends; pooling is left to the driver or
    the host.

    Each adapter is **import-guarded**: the database driver is only required
    at first acquisition, not at import time. Install the corresponding extra::

        pip install dbuser-provider[postgresql]   # psycopg2-binary
        pip install dbuser-provider[mysql]        # mysql-connector-python
        pip install dbuser-provider[oracle]       # oracledb

Architecture::

    DatabaseAdapter (base.py)        connection() context manager
        |-- SQLiteAdapter            stdlib sqlite3 (always available)
        |-- PostgreSQLAdapter        psycopg2 (optional)
        |-- MySQLAdapter             mysql.connector (optional)
        |-- OracleAdapter            oracledb (optional)

    get_adapter (registry.py)        engine name -> configured adapter
    StaticDataSourceProvider         DataSourceProvider over one adapter
    DatabaseConfig (types.py)        connection parameters
    DatabaseType (types.py)          Enum of bundled backends

Tags:
    dbuser, database, adapters, multi-backend, import-guarded

Doc-Types:
    package-overview, module-index
"""

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .oracle import OracleAdapter
from .postgresql import PostgreSQLAdapter
from .registry import StaticDataSourceProvider, get_adapter
from .sqlite import SQLiteAdapter
from .types import DatabaseConfig, DatabaseType

__all__ = [
    "DatabaseType",
    "DatabaseConfig",
    "DatabaseAdapter",
    "SQLiteAdapter",
    "PostgreSQLAdapter",
    "MySQLAdapter",
    "OracleAdapter",
    "get_adapter",
    "StaticDataSourceProvider",
]
