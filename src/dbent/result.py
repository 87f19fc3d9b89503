"""
Result envelope for the accessors of dbent containers.

Every query that can observe a non-satisfying state (``Entity.key()``,
``Many.data()``, a generated ``label()``, ...) returns ``Ok[T]`` on success
or ``Err[T]`` carrying a ``StateError``. Nothing is raised unless the caller
asks for it with ``unwrap()``.

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **Exhaustive handling:** ``match`` on ``Ok`` / ``Err`` forces both paths
    - **Functional composition:** Chain with ``map`` / ``flat_map`` without
      nested try/except blocks

Architecture:
    ::

        ┌───────────────────────────────────┐
        │            Result[T]              │
        │          (Type Alias)             │
        ├─────────────────┬─────────────────┤
        │     Ok[T]       │     Err[T]      │
        │   (Success)     │   (Failure)     │
        ├─────────────────┼─────────────────┤
        │ • value: T      │ • error: Exc    │
        │ • map()         │ • map_err()     │
        │ • flat_map()    │ • or_else()     │
        │ • unwrap()      │ • unwrap_or()   │
        └─────────────────┴─────────────────┘

Examples:
    >>> from dbent import Entity, Key
    >>> match Entity.from_key(Key.new(7)).key():
    ...     case Ok(key):
    ...         print(f"key={key}")
    ...     case Err(error):
    ...         print(f"error={error}")
    key=7

    >>> Entity.default().key().map(str).unwrap_or("-")
    '-'

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use unwrap_or() or pattern matching for safe extraction

Tags:
    result-pattern, error-handling, functional-programming, dbent

Doc-Types:
    - API Reference
    - Error Handling Tutorial
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from dbent.errors import DbentError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Ok[T] is immutable (frozen dataclass). The wrapped value
    itself is not copied: ``Ok(record).unwrap() is record``.

    Examples:
        >>> ok = Ok(42)
        >>> ok.is_ok()
        True
        >>> ok.map(lambda x: x * 2).unwrap()
        84
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

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        """Get value or call f with error (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform error if Err (no-op for Ok)."""
        return self

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        """Return self if Ok, otherwise call f with error."""
        return self

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Alias for flat_map."""
        return f(self.value)

    def ok(self) -> T | None:
        """The value, or None for Err."""
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    map() and flat_map() return the same Err unchanged, so a failure flows
    through a chain untouched. unwrap() raises the wrapped error.

    Examples:
        >>> from dbent.errors import ManyEmptyError
        >>> err = Err(ManyEmptyError())
        >>> err.is_err()
        True
        >>> err.unwrap_or([])
        []
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

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        """Call f with error to get value."""
        return f(self.error)

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        """Call f with error to try recovery."""
        return f(self.error)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def ok(self) -> T | None:
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, DbentError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]


__all__ = [
    "Result",
    "Ok",
    "Err",
]
