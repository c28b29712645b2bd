"""Row transformers: result cursor → Python value.

Each transformer takes a live :class:`~dbuser.core.protocols.ResultCursor`
and returns plain data before the executor releases the cursor. Scalar
readers look at the first column of the first row only and return ``None``
when there is no row, so "no row" is never confused with ``0``, ``False``
or ``""``.
"""

from __future__ import annotations

from typing import Any

from dbuser.core.protocols import ResultCursor

UserRecord = dict[str, str | None]

_TRUE_STRINGS = frozenset({"1", "true", "t", "y", "yes"})


def to_text(value: Any) -> str | None:
    """Render one cell as text; NULL stays ``None``."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


def column_labels(cursor: ResultCursor) -> list[str]:
    """Column labels from ``cursor.description``, in projection order."""
    if not cursor.description:
        return []
    return [str(column[0]) for column in cursor.description]


def read_records(cursor: ResultCursor) -> list[UserRecord]:
    """All rows as ``{label: text}`` mappings, in query order."""
    labels = column_labels(cursor)
    return [
        {label: to_text(value) for label, value in zip(labels, row)}
        for row in cursor
    ]


def read_int(cursor: ResultCursor) -> int | None:
    row = cursor.fetchone()
    if row is None:
        return None
    value = row[0]
    if value is None:
        return 0
    return int(value)


def read_bool(cursor: ResultCursor) -> bool | None:
    row = cursor.fetchone()
    if row is None:
        return None
    value = row[0]
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def read_str(cursor: ResultCursor) -> str | None:
    row = cursor.fetchone()
    if row is None:
        return None
    return to_text(row[0])


__all__ = [
    "UserRecord",
    "to_text",
    "column_labels",
    "read_records",
    "read_int",
    "read_bool",
    "read_str",
]
