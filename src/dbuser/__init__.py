"""dbuser -- user storage backed by an existing relational database.

Manifesto:
    Identity hosts routinely have to authenticate against a user table that
    some other system owns. ``dbuser`` reads that table through operator
    supplied SQL, pages through it on any supported engine and verifies
    passwords in whatever legacy hash encoding the rows were written with.
    It never writes to the table.

Architecture::

    dbuser.core
        errors.py          Typed error hierarchy (DBUserError, QueryError ...)
        result.py          Result[T] envelope (Ok / Err)
        logging.py         structlog configuration + LogContext
        protocols.py       Cursor / Connection / DataSource protocols
        dialect.py         Pagination dialects (postgresql, oracle, db2 ...)
        paging.py          Pageable + format_with_pageable()
        transforms.py      Cursor -> records / int / bool / str
        query.py           QueryExecutor
        adapters/          SQLite, PostgreSQL, MySQL, Oracle data sources
        settings.py        DBUSER_* environment settings

    dbuser.users
        config.py          QueryConfiguration (SQL templates + hash settings)
        credentials.py     bcrypt / PBKDF2-SHA256 / plain digest schemes
        repository.py      UserRepository facade

    dbuser.cli             ``dbuser`` Typer application

Tags:
    dbuser, user-storage, authentication, sql, package-overview
"""

__version__ = "0.1.0"
