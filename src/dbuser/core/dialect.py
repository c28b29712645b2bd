"""SQL dialect abstraction for pagination.

The only SQL this package ever writes itself is the clause that bounds a
configured query to a page window. Everything else comes verbatim from the
operator's configuration. A ``Dialect`` knows how its database family
expresses "rows [offset, offset + limit) of this query" and nothing more.

Manifesto:
    User tables live in whatever engine the organisation already runs.
    Pagination is the one place where the engines disagree on syntax, so it
    is the one place that is dialect-aware.

    - **One interface:** ``Dialect.paginate()`` for every engine
    - **Table-driven:** ``_DIALECTS`` maps a tag to a dialect; adding an
      engine is a ``register_dialect()`` call
    - **Fail loudly:** an unknown tag is a configuration error, never an
      unbounded query

Architecture::

    ┌──────────────────────────────────────────────────────────────────┐
    │                     Pagination families                          │
    └──────────────────────────────────────────────────────────────────┘

    Trailing clause           Wrapped sub-select          Trailing FETCH
    ┌──────────────────┐      ┌───────────────────────┐   ┌──────────────┐
    │ q LIMIT n        │      │ SELECT * FROM (       │   │ q OFFSET m   │
    │   OFFSET m       │      │   SELECT r.*, ROWNUM  │   │ ROWS FETCH   │
    │                  │      │   FROM (q) r ...)     │   │ NEXT n ROWS  │
    ├──────────────────┤      ├───────────────────────┤   ├──────────────┤
    │ postgresql mysql │      │ oracle (ROWNUM)       │   │ sqlserver    │
    │ mariadb sqlite h2│      │ db2 (ROW_NUMBER)      │   │              │
    └──────────────────┘      └───────────────────────┘   └──────────────┘

Examples:
    >>> from dbuser.core.dialect import get_dialect
    >>> get_dialect("postgresql").paginate("SELECT * FROM users ORDER BY id", 20, 10)
    'SELECT * FROM users ORDER BY id LIMIT 10 OFFSET 20'

Guardrails:
    ❌ DON'T: Interpolate caller-supplied strings into the page clause
    ✅ DO: Only validated ints reach ``paginate()``

    ❌ DON'T: Fall back to the unbounded query for an unknown dialect
    ✅ DO: Raise ``ConfigError``

Tags:
    dialect, sql, pagination, portability, database, dbuser

Doc-Types:
    - API Reference
    - Database Portability Guide
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dbuser.core.errors import ConfigError


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    ``paginate`` receives a complete query and non-negative ``offset`` and
    ``limit`` and returns a query over the same rows, in the same order,
    bounded to ``[offset, offset + limit)``.
    """

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'sqlite'``)."""
        ...

    def paginate(self, query: str, offset: int, limit: int) -> str:
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class LimitOffsetDialect:
    """Trailing ``LIMIT n OFFSET m``: PostgreSQL, MySQL/MariaDB, SQLite, H2."""

    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def paginate(self, query: str, offset: int, limit: int) -> str:
        return f"{query} LIMIT {limit} OFFSET {offset}"

    def __repr__(self) -> str:
        return f"LimitOffsetDialect({self._name!r})"


class OracleDialect:
    """Oracle: ``ROWNUM`` wrapped sub-select.

    Works on every Oracle release (``OFFSET … FETCH`` needs 12c). The inner
    ``ROWNUM <= offset + limit`` stops the scan early; the outer filter drops
    the rows before the window. Adds a ``rownum_`` column to the projection.
    """

    @property
    def name(self) -> str:
        return "oracle"

    def paginate(self, query: str, offset: int, limit: int) -> str:
        return (
            "SELECT * FROM ("
            f"SELECT row_.*, ROWNUM rownum_ FROM ({query}) row_ "
            f"WHERE ROWNUM <= {offset + limit}"
            f") WHERE rownum_ > {offset}"
        )


class RowNumberDialect:
    """``ROW_NUMBER() OVER ()`` wrapped sub-select: IBM DB2.

    Rows are numbered in the order the inner query returns them and the outer
    query re-sorts on that number, so the inner ``ORDER BY`` is preserved.
    Adds a ``row_num_`` column to the projection.
    """

    def __init__(self, name: str = "db2"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def paginate(self, query: str, offset: int, limit: int) -> str:
        return (
            "SELECT * FROM ("
            f"SELECT page_.*, ROW_NUMBER() OVER () AS row_num_ FROM ({query}) page_"
            f") numbered_ WHERE row_num_ > {offset} AND row_num_ <= {offset + limit} "
            "ORDER BY row_num_"
        )


class SQLServerDialect:
    """Microsoft SQL Server: ``OFFSET m ROWS FETCH NEXT n ROWS ONLY``.

    SQL Server only accepts ``OFFSET`` after an ``ORDER BY``, so the
    configured query must carry one. ``FETCH NEXT 0 ROWS`` is rejected by
    the engine; an empty page is expressed with ``TOP 0`` instead.
    """

    @property
    def name(self) -> str:
        return "sqlserver"

    def paginate(self, query: str, offset: int, limit: int) -> str:
        if limit == 0:
            return f"SELECT TOP 0 * FROM ({query} OFFSET {offset} ROWS) page_"
        return f"{query} OFFSET {offset} ROWS FETCH NEXT {limit} ROWS ONLY"


# =========================================================================
# Registry / Factory
# =========================================================================

# Dialects are stateless; one instance per tag.
_DIALECTS: dict[str, Dialect] = {
    "postgresql": LimitOffsetDialect("postgresql"),
    "postgres": LimitOffsetDialect("postgresql"),  # alias
    "mysql": LimitOffsetDialect("mysql"),
    "mariadb": LimitOffsetDialect("mariadb"),
    "sqlite": LimitOffsetDialect("sqlite"),
    "h2": LimitOffsetDialect("h2"),
    "oracle": OracleDialect(),
    "db2": RowNumberDialect("db2"),
    "sqlserver": SQLServerDialect(),
    "mssql": SQLServerDialect(),  # alias
}

_ALIASES = {"postgres", "mssql"}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Args:
        db_type: Dialect tag, case-insensitive (``'postgresql'``, ``'oracle'``, ...)

    Returns:
        Pre-instantiated :class:`Dialect` for the requested backend.

    Raises:
        ConfigError: If ``db_type`` is not recognised.
    """
    key = db_type.lower().strip() if isinstance(db_type, str) else db_type.value
    if key not in _DIALECTS:
        raise ConfigError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {supported_dialects()}"
        )
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation.

    Args:
        name: Lookup key (lower-cased automatically).
        dialect: Instance implementing :class:`Dialect`.
    """
    _DIALECTS[name.lower()] = dialect


def supported_dialects() -> list[str]:
    """Registered dialect tags, aliases excluded."""
    return sorted(set(_DIALECTS) - _ALIASES)


__all__ = [
    "Dialect",
    "LimitOffsetDialect",
    "OracleDialect",
    "RowNumberDialect",
    "SQLServerDialect",
    "get_dialect",
    "register_dialect",
    "supported_dialects",
]
