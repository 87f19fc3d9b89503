"""
Placeholder for a to-many relationship.

``Many[T]`` separates "loaded", "exists but not fetched" and "nothing". The
middle state is the useful one: a repository can hand out an order with
``lines=Many.not_fetched()`` and the caller can react to
``ManyNotFetchedError`` by fetching the lines on demand.

Architecture:
    ::

        ManyData(records)   data() → Ok(records)        (same list object)
        ManyNotFetched()    data() → Err(ManyNotFetchedError)
        ManyNone()          data() → Err(ManyEmptyError)   (default)

Examples:
    >>> lines = Many.not_fetched()
    >>> lines.data().error.kind.value
    'MANY_NOT_FETCHED'
    >>> Many.from_values([1, 2]).data().unwrap()
    [1, 2]
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from dbent.errors import ManyEmptyError, ManyNotFetchedError
from dbent.result import Err, Ok, Result
from dbent.serialization import schema_for, type_arguments, variant_schema


T = TypeVar("T")


class Many(Generic[T]):
    """Base of the three Many variants."""

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> Many[T]:
        if cls is Many:
            if args or kwargs:
                raise TypeError("Many takes no arguments; use Many.from_values or Many.not_fetched")
            return ManyNone()
        return super().__new__(cls)

    @classmethod
    def from_values(cls, records: Iterable[T]) -> Many[T]:
        """The loaded state. A list is kept as is, other iterables are copied into one."""
        if not isinstance(records, list):
            records = list(records)
        return ManyData(records)

    @classmethod
    def not_fetched(cls) -> Many[T]:
        return ManyNotFetched()

    @classmethod
    def default(cls) -> Many[T]:
        return ManyNone()

    def data(self) -> Result[list[T]]:
        """Returns the list of records if they exist and were fetched/created."""
        match self:
            case ManyData(records):
                return Ok(records)
            case ManyNotFetched():
                return Err(ManyNotFetchedError())
            case _:
                return Err(ManyEmptyError())

    def data_mut(self) -> Result[list[T]]:
        """Returns the list for in-place modification (same object as ``data()``)."""
        return self.data()

    def is_data(self) -> bool:
        return isinstance(self, ManyData)

    def is_not_fetched(self) -> bool:
        return isinstance(self, ManyNotFetched)

    def is_none(self) -> bool:
        return isinstance(self, ManyNone)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        (record_type,) = type_arguments(source, 1)
        return variant_schema(
            Many,
            {
                "data": core_schema.list_schema(schema_for(handler, record_type)),
                "not_fetched": core_schema.literal_schema([True]),
            },
            _from_wire,
            _to_wire,
        )


@dataclass(frozen=True)
class ManyData(Many[T]):
    """Created/fetched records, in order."""

    records: list[T]


@dataclass(frozen=True)
class ManyNotFetched(Many[T]):
    """The records exist but were not fetched."""


@dataclass(frozen=True)
class ManyNone(Many[T]):
    """No records to fill or fetch."""


def _from_wire(fields: dict[str, Any]) -> Many[Any]:
    if "data" in fields and "not_fetched" in fields:
        raise ValueError("a Many is either loaded or not fetched, not both")
    if "data" in fields:
        return ManyData(fields["data"])
    if "not_fetched" in fields:
        return ManyNotFetched()
    return ManyNone()


def _to_wire(many: Many[Any]) -> dict[str, Any]:
    match many:
        case ManyData(records):
            return {"data": records}
        case ManyNotFetched():
            return {"not_fetched": True}
        case _:
            return {}


__all__ = [
    "Many",
    "ManyData",
    "ManyNotFetched",
    "ManyNone",
]
