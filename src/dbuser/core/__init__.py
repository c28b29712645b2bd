"""dbuser.core -- database plumbing shared by the user repository.

Nothing in here knows about users: it runs configured SQL, bounds it to a
page window, turns cursors into plain data and reports failures as typed
errors inside a ``Result``.
"""

from dbuser.core.dialect import Dialect, get_dialect, register_dialect, supported_dialects
from dbuser.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DataSourceUnavailableError,
    DBUserError,
    MalformedCredentialError,
    QueryError,
    UnsupportedOperationError,
    ValidationError,
)
from dbuser.core.paging import Pageable, format_with_pageable
from dbuser.core.query import QueryExecutor
from dbuser.core.result import Err, Ok, Result

__all__ = [
    # dialect
    "Dialect",
    "get_dialect",
    "register_dialect",
    "supported_dialects",
    # errors
    "DBUserError",
    "ConfigError",
    "DatabaseConnectionError",
    "DataSourceUnavailableError",
    "QueryError",
    "ValidationError",
    "MalformedCredentialError",
    "UnsupportedOperationError",
    # paging / execution
    "Pageable",
    "format_with_pageable",
    "QueryExecutor",
    # result
    "Result",
    "Ok",
    "Err",
]
