"""Data-source adapter base class.

Manifesto:
    The repository only ever needs "give me a connection for the length of
    this query". Every adapter answers that with the same context manager,
    so callers never depend on a specific database vendor and a connection
    is released on every exit path.

Features:
    - Abstract ``_open()`` returning one driver connection
    - ``connection()`` context manager: open → yield → close, always
    - Driver import guarded until the first acquisition
    - Config-driven construction from ``DatabaseConfig``

Tags:
    dbuser, database, abstract-base, adapter-pattern

Doc-Types:
    api-reference
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from dbuser.core.errors import ConfigError, DatabaseConnectionError, DBUserError
from dbuser.core.logging import get_logger
from dbuser.core.protocols import Connection

from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)


class DatabaseAdapter(ABC):
    """
    Abstract base class for data-source adapters.

    Subclasses implement ``_open()``; everything else (scoping, error
    translation, logging) lives here.
    """

    def __init__(self, config: DatabaseConfig):
        self._config = config

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def db_type(self) -> DatabaseType:
        """Database type."""
        return self._config.db_type

    @abstractmethod
    def _open(self) -> Connection:
        """Open one driver connection; raise the driver's own error on failure."""
        ...

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Acquire one connection for the duration of the ``with`` block."""
        try:
            conn = self._open()
        except DBUserError:
            raise
        except Exception as e:
            raise DatabaseConnectionError(
                f"Failed to connect to {self.db_type.value}: {e}",
                cause=e,
            ) from e
        try:
            yield conn
        finally:
            try:
                conn.close()
            except Exception as e:
                logger.warning("connection_close_failed", db_type=self.db_type.value, error=str(e))

    @staticmethod
    def _require(module: str, package: str) -> Any:
        """Import an optional driver or raise ``ConfigError`` with an install hint."""
        import importlib

        try:
            return importlib.import_module(module)
        except ImportError:
            raise ConfigError(
                f"{package} is required for this data source. "
                f"Install with: pip install {package}"
            ) from None


__all__ = [
    "DatabaseAdapter",
]
