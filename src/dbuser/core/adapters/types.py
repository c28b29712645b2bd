"""Database types and connection configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DatabaseType(str, Enum):
    """Database engines with a bundled data-source adapter."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection parameters for a data source.

    Different fields are used by different database types.
    """

    db_type: DatabaseType = DatabaseType.SQLITE

    # SQLite
    path: str | None = None

    # PostgreSQL / MySQL / Oracle
    host: str = "localhost"
    port: int | None = None
    database: str = ""
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    connect_timeout: int = 10
    readonly: bool = True

    # Extra options (driver-specific keyword arguments)
    options: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "DatabaseType",
    "DatabaseConfig",
]
