"""Query configuration for the user repository.

:class:`QueryConfiguration` is built once from external configuration and
never mutated. It carries the SQL templates the repository runs, the dialect
tag used for pagination, and the credential settings the hash scheme is
resolved from.

Each template is a complete statement in the target engine's SQL with
positional placeholders in the driver's paramstyle (``?`` for SQLite/DB2,
``%s`` for PostgreSQL/MySQL, ``:1`` for Oracle):

============================  ==========  ================================
Template                      Parameters  Projection
============================  ==========  ================================
``list_all``                  none        user columns
``count``                     none        one integer
``find_by_id``                id (int)    user columns
``find_by_username``          username    user columns
``find_by_email``             email       user columns
``find_by_search_term``       ``%term%``  user columns
``find_password_hash``        username    one string
============================  ==========  ================================
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dbuser.core.dialect import get_dialect


class QueryConfiguration(BaseModel):
    """Immutable bundle of SQL templates and credential settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    list_all: str = Field(description="List every user")
    count: str = Field(description="Count every user")
    find_by_id: str = Field(description="One user by integer id")
    find_by_username: str = Field(description="One user by username")
    find_by_email: str = Field(description="One user by email")
    find_by_search_term: str = Field(description="Users matching a LIKE pattern")
    find_password_hash: str = Field(description="Stored credential by username")

    rdbms: str = Field(default="postgresql", description="Dialect tag for pagination")
    hash_function: str = Field(default="SHA-256", description="Digest name or PBKDF2-SHA256")
    blowfish: bool = Field(default=False, description="Stored hashes are bcrypt")
    allow_delete: bool = Field(default=False, description="Host may remove users")

    @field_validator(
        "list_all",
        "count",
        "find_by_id",
        "find_by_username",
        "find_by_email",
        "find_by_search_term",
        "find_password_hash",
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        # No trailing ";": templates are nested inside sub-selects.
        value = value.strip().rstrip(";").rstrip()
        if not value:
            raise ValueError("query template must not be blank")
        return value

    @field_validator("rdbms")
    @classmethod
    def _known_dialect(cls, value: str) -> str:
        get_dialect(value)
        return value.lower().strip()

    @field_validator("hash_function")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


__all__ = [
    "QueryConfiguration",
]
