"""
Result envelope for consistent success/failure handling.

Query execution never raises for driver failures; it returns ``Ok[T]`` on
success and ``Err[T]`` carrying a :class:`~dbuser.core.errors.DBUserError`
on failure. That keeps "the query ran and found nothing" (``Ok(None)`` or
``Ok([])``) distinguishable from "the query did not run" (``Err(...)``).

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **No lossy nulls:** A failed lookup is never confused with a missing row
    - **Functional composition:** map() without nested try/except

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │     Alias               │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: Exc    │ Result = Ok | Err       │
        │ • map()         │ • map() no-op   │                         │
        │ • unwrap()      │ • unwrap_or()   │                         │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> from dbuser.core.result import Ok, Err
    >>> match repository.find_user_by_username("alice"):
    ...     case Ok(None):
    ...         print("no such user")
    ...     case Ok(record):
    ...         print(record["email"])
    ...     case Err(error):
    ...         print(f"lookup failed: {error}")

Tags:
    result-pattern, error-handling, functional-programming, dbuser

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    The value may itself be ``None`` (e.g. a lookup that matched no row);
    success is carried by the type, not by the value.

    Examples:
        >>> Ok(10).map(lambda x: x * 2).unwrap()
        20
        >>> Ok(None).is_ok()
        True
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    ``map`` short-circuits and returns the same error unchanged, so a failed
    query propagates through a chain.

    Examples:
        >>> from dbuser.core.errors import QueryError
        >>> Err(QueryError("boom")).map(len).unwrap_or(0)
        0
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


__all__ = [
    "Result",
    "Ok",
    "Err",
]
