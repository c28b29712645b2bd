"""Environment-driven settings for dbuser.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.
    The host (or the CLI) reads one ``DBUserSettings`` at startup and turns
    it into the two immutable values the repository needs: a
    :class:`~dbuser.users.config.QueryConfiguration` and a data source.

    - **Pydantic validation:** Type-checked at startup, not at first login
    - **Environment-driven:** ``DBUSER_*`` variables and ``.env`` files
    - **Secrets stay secret:** the database password is a ``SecretStr``

Features:
    - **DBUserSettings:** logging, connection and query-template fields
    - **to_query_configuration():** frozen QueryConfiguration
    - **create_data_source():** adapter from ``get_adapter()``
    - **get_settings():** cached instance

Examples:
    >>> import os
    >>> os.environ["DBUSER_DB_TYPE"] = "sqlite"
    >>> os.environ["DBUSER_DB_PATH"] = "users.db"
    >>> settings = get_settings(_force_reload=True)
    >>> settings.create_data_source().db_type.value
    'sqlite'

Tags:
    settings, configuration, pydantic, environment, dbuser

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbuser.core.adapters import DatabaseAdapter, get_adapter
from dbuser.core.errors import MissingConfigError
from dbuser.users.config import QueryConfiguration

_TEMPLATE_FIELDS = (
    "list_all",
    "count",
    "find_by_id",
    "find_by_username",
    "find_by_email",
    "find_by_search_term",
    "find_password_hash",
)


class DBUserSettings(BaseSettings):
    """All dbuser settings; every field maps to a ``DBUSER_<FIELD>`` variable."""

    model_config = SettingsConfigDict(
        env_prefix="DBUSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = Field(default=None, description="None: JSON when not a tty")

    # ── Database connection ──────────────────────────────────────
    db_type: str = Field(default="sqlite", description="Adapter name (sqlite, postgresql, mysql, oracle)")
    db_path: str = Field(default="users.db", description="SQLite file path")
    db_host: str = "localhost"
    db_port: int | None = None
    db_name: str = ""
    db_user: str | None = None
    db_password: SecretStr | None = None

    # ── Queries ──────────────────────────────────────────────────
    rdbms: str | None = Field(default=None, description="Pagination dialect; defaults to db_type")
    list_all: str | None = None
    count: str | None = None
    find_by_id: str | None = None
    find_by_username: str | None = None
    find_by_email: str | None = None
    find_by_search_term: str | None = None
    find_password_hash: str | None = None

    # ── Credentials ──────────────────────────────────────────────
    hash_function: str = "SHA-256"
    blowfish: bool = False
    allow_delete: bool = False

    def to_query_configuration(self) -> QueryConfiguration:
        """Build the immutable query configuration.

        Raises:
            MissingConfigError: If a query template is not set.
        """
        templates = {}
        for name in _TEMPLATE_FIELDS:
            value = getattr(self, name)
            if not value:
                raise MissingConfigError(f"DBUSER_{name.upper()}")
            templates[name] = value

        return QueryConfiguration(
            **templates,
            rdbms=self.rdbms or self.db_type,
            hash_function=self.hash_function,
            blowfish=self.blowfish,
            allow_delete=self.allow_delete,
        )

    def create_data_source(self) -> DatabaseAdapter:
        """Build the data-source adapter for ``db_type``."""
        if self.db_type.lower() == "sqlite":
            return get_adapter("sqlite", path=self.db_path)

        kwargs = {
            "host": self.db_host,
            "database": self.db_name,
            "username": self.db_user,
            "password": self.db_password.get_secret_value() if self.db_password else None,
        }
        if self.db_port is not None:
            kwargs["port"] = self.db_port
        return get_adapter(self.db_type, **kwargs)


_settings_cache: dict[str, DBUserSettings] = {}


def get_settings(*, _force_reload: bool = False) -> DBUserSettings:
    """Load, validate, and cache a :class:`DBUserSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = DBUserSettings()
    _settings_cache["default"] = settings
    return settings


__all__ = [
    "DBUserSettings",
    "get_settings",
]
