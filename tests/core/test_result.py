"""Tests for the Ok/Err result envelope."""

import pytest

from dbuser.core.errors import QueryError
from dbuser.core.result import Err, Ok


class TestOk:
    def test_flags(self):
        assert Ok(1).is_ok() is True
        assert Ok(1).is_err() is False

    def test_unwrap(self):
        assert Ok("alice").unwrap() == "alice"
        assert Ok(None).unwrap_or("x") is None

    def test_map(self):
        assert Ok(2).map(lambda v: v * 3) == Ok(6)

    def test_repr(self):
        assert repr(Ok([1])) == "Ok([1])"

    def test_pattern_matching(self):
        match Ok(None):
            case Ok(None):
                matched = "absent"
            case Ok(_):
                matched = "present"
            case Err(_):
                matched = "failed"
        assert matched == "absent"


class TestErr:
    def test_flags(self):
        error = Err(QueryError("x"))
        assert error.is_err() is True
        assert error.is_ok() is False

    def test_unwrap_raises(self):
        with pytest.raises(QueryError):
            Err(QueryError("x")).unwrap()

    def test_unwrap_or(self):
        assert Err(QueryError("x")).unwrap_or(0) == 0

    def test_map_short_circuits(self):
        error = QueryError("x")
        result = Err(error).map(lambda v: v + 1).map(str)
        assert result.error is error

    def test_repr(self):
        assert repr(Err(QueryError("x"))).startswith("Err(QueryError(")
