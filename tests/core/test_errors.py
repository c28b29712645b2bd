"""Tests for dbuser.core.errors module."""

import pytest

from dbuser.core.errors import (
    ConfigError,
    CredentialError,
    DatabaseConnectionError,
    DatabaseError,
    DataSourceUnavailableError,
    DBUserError,
    ErrorCategory,
    ErrorContext,
    MalformedCredentialError,
    MissingConfigError,
    QueryError,
    TransientError,
    UnsupportedOperationError,
    ValidationError,
)


class TestErrorContext:
    def test_empty_context(self):
        assert ErrorContext().to_dict() == {}

    def test_only_set_fields(self):
        ctx = ErrorContext(query="SELECT 1", dialect="oracle")
        assert ctx.to_dict() == {"query": "SELECT 1", "dialect": "oracle"}

    def test_metadata_merged(self):
        ctx = ErrorContext(username="alice", metadata={"attempt": 2})
        assert ctx.to_dict() == {"username": "alice", "attempt": 2}


class TestDBUserError:
    def test_defaults(self):
        error = DBUserError("boom")
        assert error.message == "boom"
        assert str(error) == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False
        assert error.cause is None

    def test_overrides(self):
        error = DBUserError("boom", category=ErrorCategory.UNKNOWN, retryable=True)
        assert error.category == ErrorCategory.UNKNOWN
        assert error.retryable is True

    def test_cause_chained(self):
        cause = RuntimeError("driver")
        error = QueryError("failed", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_with_context_typed_and_metadata(self):
        error = QueryError("failed").with_context(dialect="db2", page=3)
        assert error.context.dialect == "db2"
        assert error.context.metadata == {"page": 3}

    def test_with_context_returns_self(self):
        error = QueryError("failed")
        assert error.with_context(query="SELECT 1") is error

    def test_to_dict(self):
        error = QueryError("failed", cause=ValueError("x")).with_context(query="SELECT 1")
        assert error.to_dict() == {
            "error_type": "QueryError",
            "message": "failed",
            "category": "DATABASE",
            "retryable": False,
            "context": {"query": "SELECT 1"},
            "cause": "x",
        }

    def test_repr(self):
        assert repr(ConfigError("bad")) == "ConfigError('bad', category=CONFIG)"


class TestHierarchy:
    @pytest.mark.parametrize(
        ("cls", "category", "retryable"),
        [
            (DatabaseConnectionError, ErrorCategory.DATABASE, True),
            (DataSourceUnavailableError, ErrorCategory.DATABASE, True),
            (QueryError, ErrorCategory.DATABASE, False),
            (ConfigError, ErrorCategory.CONFIG, False),
            (ValidationError, ErrorCategory.VALIDATION, False),
            (MalformedCredentialError, ErrorCategory.AUTH, False),
            (UnsupportedOperationError, ErrorCategory.INTERNAL, False),
        ],
    )
    def test_category_and_retry(self, cls, category, retryable):
        error = cls() if cls is DataSourceUnavailableError else cls("x")
        assert error.category == category
        assert error.retryable is retryable

    def test_subclassing(self):
        assert issubclass(DatabaseConnectionError, TransientError)
        assert issubclass(QueryError, DatabaseError)
        assert issubclass(MalformedCredentialError, CredentialError)
        assert issubclass(MissingConfigError, ConfigError)

    def test_unsupported_is_not_implemented(self):
        with pytest.raises(NotImplementedError):
            raise UnsupportedOperationError("Password update not supported")

    def test_unavailable_default_message(self):
        assert DataSourceUnavailableError().message == "No data source available"


class TestConfigErrors:
    def test_missing(self):
        error = MissingConfigError("DBUSER_LIST_ALL")
        assert error.key == "DBUSER_LIST_ALL"
        assert "DBUSER_LIST_ALL" in error.message


class TestValidationError:
    def test_field_and_value_serialized(self):
        data = ValidationError("bad id", field="id", value="abc").to_dict()
        assert data["field"] == "id"
        assert data["value"] == "'abc'"
