"""User repository: the read/verify surface the identity host consumes.

Every lookup is one configured statement run through the
:class:`~dbuser.core.query.QueryExecutor`. Lookups return a ``Result``:
``Ok(None)`` / ``Ok([])`` when nothing matched, ``Err(...)`` when the query
could not run. Credential checks return a plain ``bool``.
"""

from __future__ import annotations

from dbuser.core.errors import ValidationError
from dbuser.core.logging import LogContext, get_logger
from dbuser.core.paging import Pageable
from dbuser.core.protocols import DataSourceProvider
from dbuser.core.query import QueryExecutor
from dbuser.core.result import Err, Result
from dbuser.core.transforms import UserRecord, read_int, read_records
from dbuser.users.config import QueryConfiguration
from dbuser.users.credentials import CredentialValidator

logger = get_logger(__name__)


def _first(records: list[UserRecord]) -> UserRecord | None:
    return records[0] if records else None


def _like(search: str) -> str:
    return f"%{search}%"


class UserRepository:
    """Read-only access to users kept in a database this host does not own."""

    def __init__(self, provider: DataSourceProvider, config: QueryConfiguration):
        self._config = config
        self._executor = QueryExecutor(provider, config.rdbms)
        self._credentials = CredentialValidator(self._executor, config)

    @property
    def config(self) -> QueryConfiguration:
        return self._config

    def get_all_users(self) -> Result[list[UserRecord]]:
        return self._executor.execute(self._config.list_all, None, read_records)

    def get_users_count(self, search: str | None = None) -> Result[int]:
        """Number of users, or of users matching ``search`` when one is given."""
        if not search:
            result = self._executor.execute(self._config.count, None, read_int)
        else:
            query = f"select count(*) from ({self._config.find_by_search_term}) search_count"
            result = self._executor.execute(query, None, read_int, _like(search))
        return result.map(lambda count: count or 0)

    def find_user_by_id(self, user_id: int | str) -> Result[UserRecord | None]:
        try:
            key = int(user_id)
        except (TypeError, ValueError) as e:
            return Err(ValidationError("User id must be an integer", field="id", value=user_id, cause=e))
        return self._executor.execute(self._config.find_by_id, None, read_records, key).map(_first)

    def find_user_by_username(self, username: str) -> Result[UserRecord | None]:
        return self._executor.execute(
            self._config.find_by_username, None, read_records, username
        ).map(_first)

    def find_user_by_email(self, email: str) -> Result[UserRecord | None]:
        return self._executor.execute(
            self._config.find_by_email, None, read_records, email
        ).map(_first)

    def find_users(
        self,
        search: str | None = None,
        pageable: Pageable | None = None,
    ) -> Result[list[UserRecord]]:
        """List users, filtered by ``search`` and bounded to ``pageable`` if given."""
        if not search:
            return self._executor.execute(self._config.list_all, pageable, read_records)
        return self._executor.execute(
            self._config.find_by_search_term, pageable, read_records, _like(search)
        )

    def validate_credentials(self, username: str, password: str) -> bool:
        """``True`` only on a match; every failure, including configuration, is ``False``."""
        with LogContext(operation="validate_credentials", username=username):
            return self._credentials.validate(username, password)

    def update_credentials(self, username: str, password: str) -> bool:
        """Always raises :class:`~dbuser.core.errors.UnsupportedOperationError`."""
        return self._credentials.update(username, password)

    def remove_user(self) -> bool:
        """Whether the host may delete users; nothing is deleted here."""
        return self._config.allow_delete


__all__ = [
    "UserRepository",
]
