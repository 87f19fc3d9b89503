"""
Identifier wrapper for record primary keys.

``Key[K]`` holds an optional value standing in for a record's primary key.
Absence is its own state: ``Key()`` is "no identity yet", which is never the
same thing as ``Key(0)`` or ``Key("")``.

Manifesto:
    - **Absence is first-class:** ``Key()`` is distinguishable from any
      present value, including falsy ones
    - **No validation:** any ``K`` is accepted, even types with their own
      notion of "empty"
    - **Transparent on the wire:** serialises as the plain optional value

Architecture:
    ::

        Key[K]
        ├── value: K | None      (None == absent)
        ├── new(v)               → present
        ├── from_optional(v)     → present or absent
        ├── is_some() / is_none()
        ├── str(key)             → str(v) or "None"
        └── into_entity()        → EntityKey

Examples:
    >>> Key.new(5)
    Key(5)
    >>> str(Key.new(5)), str(Key())
    ('5', 'None')
    >>> Key(0).is_some()
    True
    >>> Key.from_optional(None).is_none()
    True

Guardrails:
    ❌ DON'T: Test a key with ``if key:``; ``Key(0)`` is a present key
    ✅ DO: Use ``key.is_some()`` / ``key.is_none()``

Tags:
    key, identifier, optional, value-object, dbent

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import copy
from dataclasses import FrozenInstanceError
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema

from dbent.serialization import key_schema

if TYPE_CHECKING:
    from dbent.entity import Entity


K = TypeVar("K")
T = TypeVar("T")


class Key(Generic[K]):
    """
    An optional primary key value.

    ``None`` is the absence marker, so ``None`` itself is not a usable key
    value: ``Key.new(None)`` is the absent key.
    """

    __slots__ = ("value",)
    __match_args__ = ("value",)

    value: K | None

    def __init__(self, value: K | None = None) -> None:
        object.__setattr__(self, "value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenInstanceError(f"cannot assign to field {name!r}")

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((Key, self.value))

    def __reduce__(self) -> tuple[Any, ...]:
        return (Key, (self.value,))

    @classmethod
    def new(cls, value: K) -> Key[K]:
        """Creates a present key from ``value``."""
        return cls(value)

    @classmethod
    def from_optional(cls, value: K | None, *, clone: bool = False) -> Key[K]:
        """
        Creates a key from an optional value.

        With ``clone=True`` the key holds a deep copy, so later mutation of the
        caller's value does not leak into the key.
        """
        if clone and value is not None:
            value = copy.deepcopy(value)
        return cls(value)

    def is_some(self) -> bool:
        return self.value is not None

    def is_none(self) -> bool:
        return self.value is None

    def get(self) -> K | None:
        """The underlying optional value."""
        return self.value

    def unwrap_or(self, default: K) -> K:
        if self.value is None:
            return default
        return self.value

    def into_entity(self) -> Entity[K, Any]:
        """Converts this key into the by-key state of an ``Entity``."""
        from dbent.entity import EntityKey

        return EntityKey(self)

    def to_entity(self) -> Entity[K, Any]:
        """Like ``into_entity`` but the entity holds a copy of this key."""
        from dbent.entity import EntityKey

        return EntityKey(Key.from_optional(self.value, clone=True))

    def __str__(self) -> str:
        if self.value is None:
            return "None"
        return str(self.value)

    def __repr__(self) -> str:
        if self.value is None:
            return "Key()"
        return f"Key({self.value!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return key_schema(cls, source, handler)


__all__ = ["Key"]
