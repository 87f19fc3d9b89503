"""
Single-record reference that also caches the record's label.

``EntityLabel[K, T, L]`` is ``Entity`` with the label folded into the
by-key state. Selecting ``customer_id, customer_name`` is enough to render
a link to the customer without a join, and a row whose key is missing but
whose label survived still has something to show.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                    EntityLabel[K, T, L]                     │
        ├─────────────────────┬───────────────────┬───────────────────┤
        │  EntityLabelKey     │  EntityLabelData  │  EntityLabelNone  │
        │  ident: Key[K]      │  record: T        │  (default)        │
        │  cached_label: L    │                   │                   │
        ├─────────────────────┼───────────────────┼───────────────────┤
        │ key()   → Ok(ident) │ record.key()      │ Err(LabelEmpty)   │
        │ label() → Ok(label) │ record.label()    │ Err(LabelEmpty)   │
        │ data()  → Err(Not-  │ Ok(record)        │ Err(LabelEmpty)   │
        │          Fetched)   │                   │                   │
        └─────────────────────┴───────────────────┴───────────────────┘

    Being both Keyed and Labeled, every EntityLabel is also Tagged.

Examples:
    >>> from dbent import Key
    >>> ref = EntityLabel.from_key_label(Key.new(4), "Grace")
    >>> ref.label().unwrap(), str(ref.key().unwrap())
    ('Grace', '4')
    >>> ref.data().is_err()
    True

Tags:
    entity-label, reference, tagged-union, to-one, label-cache, dbent

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema

from dbent.errors import EntityLabelEmptyError, EntityLabelNotFetchedError
from dbent.key import Key
from dbent.result import Err, Ok, Result
from dbent.serialization import schema_for, type_arguments, variant_schema
from dbent.tag import TaggedMixin


K = TypeVar("K")
T = TypeVar("T")
L = TypeVar("L")


class EntityLabel(TaggedMixin, Generic[K, T, L]):
    """Base of the three EntityLabel variants."""

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> EntityLabel[K, T, L]:
        if cls is EntityLabel:
            if args or kwargs:
                raise TypeError(
                    "EntityLabel takes no arguments; use EntityLabel.from_key_label or EntityLabel.from_value"
                )
            return EntityLabelNone()
        return super().__new__(cls)

    @classmethod
    def from_key_label(cls, key: Key[K] | K, label: L) -> EntityLabel[K, T, L]:
        """The by-key state. A bare value is wrapped in a present ``Key``."""
        if not isinstance(key, Key):
            key = Key(key)
        return EntityLabelKey(key, label)

    @classmethod
    def from_value(cls, record: T) -> EntityLabel[K, T, L]:
        return EntityLabelData(record)

    @classmethod
    def default(cls) -> EntityLabel[K, T, L]:
        return EntityLabelNone()

    def key(self) -> Result[Key[K]]:
        match self:
            case EntityLabelKey(ident, _):
                return Ok(ident)
            case EntityLabelData(record):
                return record.key()
            case _:
                return Err(EntityLabelEmptyError())

    def label(self) -> Result[L]:
        match self:
            case EntityLabelKey(_, cached_label):
                return Ok(cached_label)
            case EntityLabelData(record):
                return record.label()
            case _:
                return Err(EntityLabelEmptyError())

    def data(self) -> Result[T]:
        """Returns the record if it exists and was fetched/created."""
        match self:
            case EntityLabelData(record):
                return Ok(record)
            case EntityLabelKey():
                return Err(EntityLabelNotFetchedError())
            case _:
                return Err(EntityLabelEmptyError())

    def data_mut(self) -> Result[T]:
        """Returns the record for in-place modification (same object as ``data()``)."""
        return self.data()

    def is_keylabel(self) -> bool:
        return isinstance(self, EntityLabelKey)

    def is_data(self) -> bool:
        return isinstance(self, EntityLabelData)

    def is_none(self) -> bool:
        return isinstance(self, EntityLabelNone)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        key_type, record_type, label_type = type_arguments(source, 3)
        return variant_schema(
            EntityLabel,
            {
                "key": handler.generate_schema(Key[key_type]),
                "label": schema_for(handler, label_type),
                "data": schema_for(handler, record_type),
            },
            _from_wire,
            _to_wire,
        )


@dataclass(frozen=True)
class EntityLabelKey(EntityLabel[K, T, L]):
    """Key and label for this entity; the record was not fetched."""

    ident: Key[K]
    cached_label: L


@dataclass(frozen=True)
class EntityLabelData(EntityLabel[K, T, L]):
    """Created/fetched record for the entity."""

    record: T


@dataclass(frozen=True)
class EntityLabelNone(EntityLabel[K, T, L]):
    """For when you have no data to fill or null from the database."""


def _from_wire(fields: dict[str, Any]) -> EntityLabel[Any, Any, Any]:
    has_key_label = "key" in fields or "label" in fields
    if has_key_label and "data" in fields:
        raise ValueError("an EntityLabel holds either a key and label or data, not both")
    if has_key_label:
        if "key" not in fields or "label" not in fields:
            raise ValueError("an EntityLabel key needs its label and vice versa")
        return EntityLabelKey(fields["key"], fields["label"])
    if "data" in fields:
        return EntityLabelData(fields["data"])
    return EntityLabelNone()


def _to_wire(entity: EntityLabel[Any, Any, Any]) -> dict[str, Any]:
    match entity:
        case EntityLabelKey(ident, cached_label):
            return {"key": ident, "label": cached_label}
        case EntityLabelData(record):
            return {"data": record}
        case _:
            return {}


__all__ = [
    "EntityLabel",
    "EntityLabelKey",
    "EntityLabelData",
    "EntityLabelNone",
]
