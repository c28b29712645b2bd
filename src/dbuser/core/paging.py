"""Page windows over ordered result sets.

A :class:`Pageable` is the ``(first, max)`` pair a host sends when it wants a
slice of the user list; :func:`format_with_pageable` turns a configured query
into the bounded query for a dialect.
"""

from __future__ import annotations

from dataclasses import dataclass

from dbuser.core.dialect import Dialect, get_dialect
from dbuser.core.errors import ValidationError


@dataclass(frozen=True, slots=True)
class Pageable:
    """Requested window: skip ``first`` rows, return at most ``max`` rows.

    Both values must be non-negative ints. ``max == 0`` is a legal, empty page.
    """

    first: int = 0
    max: int = 100

    def __post_init__(self) -> None:
        for field_name in ("first", "max"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"Pageable.{field_name} must be an int",
                    field=field_name,
                    value=value,
                )
            if value < 0:
                raise ValidationError(
                    f"Pageable.{field_name} must be non-negative",
                    field=field_name,
                    value=value,
                )

    @property
    def end(self) -> int:
        """Exclusive upper bound of the window."""
        return self.first + self.max


def format_with_pageable(query: str, pageable: Pageable, dialect: Dialect | str) -> str:
    """Rewrite ``query`` to return only the rows in ``pageable``'s window.

    Raises:
        ConfigError: If ``dialect`` is a tag with no registered dialect.
    """
    if isinstance(dialect, str):
        dialect = get_dialect(dialect)
    return dialect.paginate(query.strip().rstrip(";").rstrip(), pageable.first, pageable.max)


__all__ = [
    "Pageable",
    "format_with_pageable",
]
