"""
Single-record reference: a key, the fetched record, or nothing.

``Entity[K, T]`` is what a record uses for a to-one relationship. Instead of
an ``Optional[T]`` plus a separate ``customer_id`` column, the field holds
exactly one of three variants and every call site has to handle all three.

Manifesto:
    - **Three states, one field:** "not joined", "joined" and "intentionally
      absent" are distinct variants, not a null plus a flag
    - **Delegation:** in the data state ``key()`` asks the record itself
    - **Failures as values:** wrong-state queries return ``Err``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      Entity[K, T]                           │
        ├───────────────────┬───────────────────┬─────────────────────┤
        │  EntityKey        │  EntityData       │  EntityNone         │
        │  ident: Key[K]    │  record: T        │  (default)          │
        ├───────────────────┼───────────────────┼─────────────────────┤
        │ key()  → Ok(ident)│ record.key()      │ Err(EntityEmpty)    │
        │ data() → Err(Not- │ Ok(record)        │ Err(EntityEmpty)    │
        │         Fetched)  │                   │                     │
        └───────────────────┴───────────────────┴─────────────────────┘

Examples:
    Building references:

    >>> from dbent import Key
    >>> Entity.from_key(Key.new(10))
    EntityKey(ident=Key(10))
    >>> Entity.default()
    EntityNone()

    Handling every state:

    >>> def customer_name(ref):
    ...     match ref:
    ...         case EntityData(record):
    ...             return record.name
    ...         case EntityKey(ident):
    ...             return f"customer #{ident}"
    ...         case EntityNone():
    ...             return "walk-in"
    >>> customer_name(Entity.from_key(Key.new(10)))
    'customer #10'

Guardrails:
    ❌ DON'T: Put a record without a ``key()`` method in ``EntityData`` and
       then call ``key()``; the delegation needs it
    ✅ DO: Decorate records with ``@keyed`` or implement ``Keyed`` by hand

    ❌ DON'T: Mutate a variant; they are frozen
    ✅ DO: Replace the whole field: ``order.customer = Entity.from_value(c)``

Tags:
    entity, reference, tagged-union, to-one, dbent

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema

from dbent.errors import EntityEmptyError, EntityNotFetchedError
from dbent.key import Key
from dbent.result import Err, Ok, Result
from dbent.serialization import schema_for, type_arguments, variant_schema


K = TypeVar("K")
T = TypeVar("T")


class Entity(Generic[K, T]):
    """
    Base of the three Entity variants.

    Calling ``Entity()`` gives ``EntityNone()``. Otherwise use ``from_key``,
    ``from_value`` or the variant classes themselves.
    """

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> Entity[K, T]:
        if cls is Entity:
            if args or kwargs:
                raise TypeError("Entity takes no arguments; use Entity.from_key or Entity.from_value")
            return EntityNone()
        return super().__new__(cls)

    @classmethod
    def from_key(cls, key: Key[K] | K) -> Entity[K, T]:
        """The by-key state. A bare value is wrapped in a present ``Key``."""
        if not isinstance(key, Key):
            key = Key(key)
        return EntityKey(key)

    @classmethod
    def from_value(cls, record: T) -> Entity[K, T]:
        """The data state; the entity takes the record as is."""
        return EntityData(record)

    @classmethod
    def default(cls) -> Entity[K, T]:
        return EntityNone()

    def key(self) -> Result[Key[K]]:
        """Returns the Key, asking the record itself in the data state."""
        match self:
            case EntityKey(ident):
                return Ok(ident)
            case EntityData(record):
                return record.key()
            case _:
                return Err(EntityEmptyError())

    def data(self) -> Result[T]:
        """Returns the record if it exists and was fetched/created."""
        match self:
            case EntityData(record):
                return Ok(record)
            case EntityKey():
                return Err(EntityNotFetchedError())
            case _:
                return Err(EntityEmptyError())

    def data_mut(self) -> Result[T]:
        """
        Returns the record for in-place modification.

        The same object ``data()`` returns; the variant stays frozen, the
        record it holds does not.
        """
        return self.data()

    def is_key(self) -> bool:
        return isinstance(self, EntityKey)

    def is_data(self) -> bool:
        return isinstance(self, EntityData)

    def is_none(self) -> bool:
        return isinstance(self, EntityNone)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        key_type, record_type = type_arguments(source, 2)
        return variant_schema(
            Entity,
            {
                "key": handler.generate_schema(Key[key_type]),
                "data": schema_for(handler, record_type),
            },
            _from_wire,
            _to_wire,
        )


@dataclass(frozen=True)
class EntityKey(Entity[K, T]):
    """Key of the entity; the record was not fetched."""

    ident: Key[K]


@dataclass(frozen=True)
class EntityData(Entity[K, T]):
    """Created/fetched record for the entity."""

    record: T


@dataclass(frozen=True)
class EntityNone(Entity[K, T]):
    """For when you have no data to fill or null from the database."""


def _from_wire(fields: dict[str, Any]) -> Entity[Any, Any]:
    if "key" in fields and "data" in fields:
        raise ValueError("an Entity holds either a key or data, not both")
    if "key" in fields:
        return EntityKey(fields["key"])
    if "data" in fields:
        return EntityData(fields["data"])
    return EntityNone()


def _to_wire(entity: Entity[Any, Any]) -> dict[str, Any]:
    match entity:
        case EntityKey(ident):
            return {"key": ident}
        case EntityData(record):
            return {"data": record}
        case _:
            return {}


__all__ = [
    "Entity",
    "EntityKey",
    "EntityData",
    "EntityNone",
]
