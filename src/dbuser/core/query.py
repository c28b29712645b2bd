"""Parameterized query execution.

:class:`QueryExecutor` is the single place that touches a driver. One call
acquires one connection, optionally rewrites the query for a page window,
binds the parameters positionally, hands the live cursor to a transformer
and releases cursor and connection on every exit path.

Manifesto:
    The repository above this layer should read like a list of queries, not
    like connection plumbing. Centralising execution gives one place for:

    - **Scoped resources:** ``with`` blocks own the connection and cursor
    - **Error translation:** driver exceptions become ``Err(QueryError)``;
      a missing data source becomes ``Err(DataSourceUnavailableError)``
    - **Uniform logging:** one ``query_executed`` / ``query_failed`` event
      per statement

Architecture:
    ::

        execute(query, pageable, transform, *params)
            │
            ├─ provider.get_data_source() ── None ──> Err(DataSourceUnavailableError)
            │
            ├─ with data_source.connection() as conn ── fails ──> Err(DatabaseConnectionError)
            │      │
            │      ├─ pageable? → format_with_pageable(query, pageable, dialect)
            │      ├─ cursor.execute(query, params) ── fails ──> Err(QueryError)
            │      └─ transform(cursor) ──────────── fails ──> Err(QueryError)
            │
            └─ Ok(transform result)

Examples:
    >>> executor = QueryExecutor(provider, "postgresql")
    >>> executor.execute(
    ...     "SELECT * FROM users WHERE email = %s", None, read_records, "a@b.c"
    ... )
    Ok([{'id': '1', 'email': 'a@b.c'}])

Tags:
    query, execution, database, result-pattern, dbuser

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from contextlib import closing
from typing import Any, Callable, TypeVar

from dbuser.core.dialect import Dialect, get_dialect
from dbuser.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DataSourceUnavailableError,
    DBUserError,
    QueryError,
)
from dbuser.core.logging import get_logger
from dbuser.core.paging import Pageable, format_with_pageable
from dbuser.core.protocols import DataSourceProvider, ResultCursor
from dbuser.core.result import Err, Ok, Result

logger = get_logger(__name__)

T = TypeVar("T")


class QueryExecutor:
    """Runs configured SQL against the provider's data source.

    Args:
        provider: Source of the (optional) data source for each call.
        dialect: Dialect instance or tag used for pagination rewriting.
    """

    def __init__(self, provider: DataSourceProvider, dialect: Dialect | str):
        self._provider = provider
        self._dialect = get_dialect(dialect) if isinstance(dialect, str) else dialect

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def execute(
        self,
        query: str,
        pageable: Pageable | None,
        transform: Callable[[ResultCursor], T],
        *params: Any,
    ) -> Result[T]:
        """Execute ``query`` and return ``Ok(transform(cursor))`` or ``Err``."""
        data_source = self._provider.get_data_source()
        if data_source is None:
            logger.warning("data_source_unavailable", dialect=self._dialect.name)
            return Err(DataSourceUnavailableError().with_context(dialect=self._dialect.name))

        if pageable is not None:
            query = format_with_pageable(query, pageable, self._dialect)

        try:
            with data_source.connection() as conn:
                logger.debug("query_prepared", query=query, params=list(params))
                with closing(conn.cursor()) as cursor:
                    if params:
                        cursor.execute(query, params)
                    else:
                        cursor.execute(query)
                    value = transform(cursor)
        except DBUserError as e:
            if isinstance(e, ConfigError):
                raise
            return self._fail(e, query)
        except Exception as e:
            return self._fail(QueryError(f"Query failed: {e}", cause=e), query)

        logger.info(
            "query_executed",
            dialect=self._dialect.name,
            paged=pageable is not None,
            params=len(params),
        )
        return Ok(value)

    def _fail(self, error: DBUserError, query: str) -> Err:
        error.with_context(query=query, dialect=self._dialect.name)
        logger.error("query_failed", **error.to_dict())
        return Err(error)


__all__ = [
    "QueryExecutor",
]
