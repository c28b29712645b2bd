"""
Structured error types for dbuser.

Provides the typed error hierarchy used by the query layer, the credential
schemes and the user repository. Every error carries a category, an explicit
retry flag, structured context and an optional chained cause, so a failed
lookup can be logged and routed without string matching.

Manifesto:
    - **Typed Error Hierarchy:** Unavailable, query failure, malformed
      credential and unsupported operation are different types
    - **Explicit Retry Semantics:** Connection problems are retryable,
      configuration and query errors are not
    - **Rich Context:** Errors carry query/dialect/username metadata
    - **Error Chaining:** The driver exception is kept as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        DBUserError                          │
        │        (category, retryable, context, cause)                │
        ├─────────────────────────────────────────────────────────────┤
        │                                                             │
        │  TransientError          ConfigError        ValidationError │
        │  (retryable=True)        (CONFIG)           (VALIDATION)    │
        │       │                       │                             │
        │  DatabaseConnectionError  MissingConfigError                │
        │  DataSourceUnavailable                                      │
        │                                                             │
        │  DatabaseError           CredentialError   Unsupported-     │
        │  (DATABASE)              (AUTH)            OperationError   │
        │       │                       │            (INTERNAL)       │
        │  QueryError              MalformedCredentialError           │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = QueryError("syntax error near FROM")
    >>> error.retryable
    False
    >>> error.with_context(dialect="postgresql").context.metadata["dialect"]
    'postgresql'

Guardrails:
    ❌ DON'T: Put passwords or stored hashes into error context
    ✅ DO: Identify the user by username only

    ❌ DON'T: Swallow the driver exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context, dbuser

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        DATABASE: Connection acquisition, driver and SQL errors
        CONFIG: Missing or invalid configuration (templates, dialect, hash)
        VALIDATION: Bad caller input (non-numeric id, negative page)
        AUTH: Credential parsing and verification problems
        INTERNAL: Unsupported operations, unexpected state
        UNKNOWN: Uncategorized errors
    """

    DATABASE = "DATABASE"
    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    AUTH = "AUTH"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover what the query layer knows about a failure; anything
    else goes into ``metadata``. ``to_dict()`` serializes only the fields
    that are set.

    Attributes:
        operation: Repository operation name (e.g. ``find_user_by_email``)
        query: SQL text that was executed (after pagination rewriting)
        dialect: Dialect tag in effect
        username: User the operation concerned, if any
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    query: str | None = None
    dialect: str | None = None
    username: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "query", "dialect", "username"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class DBUserError(Exception):
    """
    Base exception for all dbuser errors.

    Subclasses set ``default_category`` and ``default_retryable`` to give
    sensible defaults for their domain; callers may override either per
    instance.

    Examples:
        >>> error = DBUserError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["retryable"]
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> DBUserError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(QueryError("Failed", cause=e).with_context(
                query=sql, dialect="oracle"
            ))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSIENT ERRORS (Retryable)
# =============================================================================


class TransientError(DBUserError):
    """Temporary error that may succeed on retry."""

    default_category = ErrorCategory.DATABASE
    default_retryable = True


class DatabaseConnectionError(TransientError):
    """A connection could not be acquired from the data source."""

    default_category = ErrorCategory.DATABASE


class DataSourceUnavailableError(TransientError):
    """No data source is reachable at all."""

    default_category = ErrorCategory.DATABASE

    def __init__(self, message: str = "No data source available", **kwargs: Any):
        super().__init__(message, **kwargs)


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(DBUserError):
    """Database query error."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class QueryError(DatabaseError):
    """SQL statement failed: malformed statement, binding mismatch, execution error."""

    pass


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(DBUserError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(DBUserError):
    """
    Caller input is invalid.

    Never retryable - input must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


# =============================================================================
# CREDENTIAL ERRORS
# =============================================================================


class CredentialError(DBUserError):
    """Credential verification problem."""

    default_category = ErrorCategory.AUTH
    default_retryable = False


class MalformedCredentialError(CredentialError):
    """Stored hash does not match the field layout its scheme expects."""

    pass


class UnsupportedOperationError(DBUserError, NotImplementedError):
    """Operation deliberately not supported (e.g. password update)."""

    default_category = ErrorCategory.INTERNAL
    default_retryable = False


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "DBUserError",
    "TransientError",
    "DatabaseConnectionError",
    "DataSourceUnavailableError",
    "DatabaseError",
    "QueryError",
    "ConfigError",
    "MissingConfigError",
    "ValidationError",
    "CredentialError",
    "MalformedCredentialError",
    "UnsupportedOperationError",
]
