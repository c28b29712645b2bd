"""Tests for Pageable and format_with_pageable."""

from __future__ import annotations

import pytest

from dbuser.core.dialect import get_dialect
from dbuser.core.errors import ConfigError, ValidationError
from dbuser.core.paging import Pageable, format_with_pageable


class TestPageable:
    def test_defaults(self):
        page = Pageable()
        assert page.first == 0
        assert page.max == 100

    def test_end(self):
        assert Pageable(first=20, max=10).end == 30

    def test_zero_max_is_legal(self):
        assert Pageable(first=5, max=0).end == 5

    @pytest.mark.parametrize("field", ["first", "max"])
    def test_negative_rejected(self, field):
        with pytest.raises(ValidationError) as exc_info:
            Pageable(**{field: -1})
        assert exc_info.value.field == field
        assert exc_info.value.value == -1

    @pytest.mark.parametrize("value", ["10", 1.5, None, True])
    def test_non_int_rejected(self, value):
        with pytest.raises(ValidationError, match="must be an int"):
            Pageable(first=value)

    def test_frozen(self):
        page = Pageable()
        with pytest.raises(AttributeError):
            page.first = 3


class TestFormatWithPageable:
    def test_accepts_dialect_tag(self):
        sql = format_with_pageable("SELECT * FROM users", Pageable(10, 5), "postgresql")
        assert sql == "SELECT * FROM users LIMIT 5 OFFSET 10"

    def test_accepts_dialect_instance(self):
        sql = format_with_pageable("SELECT * FROM users", Pageable(0, 5), get_dialect("oracle"))
        assert "ROWNUM <= 5" in sql

    def test_trailing_semicolon_stripped(self):
        sql = format_with_pageable("SELECT * FROM users ;  \n", Pageable(0, 1), "sqlite")
        assert sql == "SELECT * FROM users LIMIT 1 OFFSET 0"

    def test_unknown_dialect(self):
        with pytest.raises(ConfigError):
            format_with_pageable("SELECT 1", Pageable(), "informix")
