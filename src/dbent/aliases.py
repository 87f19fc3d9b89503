"""Convenience aliases for the common key and label types."""

from typing import TypeVar

from dbent.entity import Entity
from dbent.entity_label import EntityLabel

T = TypeVar("T")

# Default key value type for integer primary keys
Int = int

EntityInt = Entity[Int, T]
EntityString = Entity[str, T]
EntityLabelInt = EntityLabel[Int, T, str]
EntityLabelString = EntityLabel[str, T, str]

__all__ = [
    "Int",
    "EntityInt",
    "EntityString",
    "EntityLabelInt",
    "EntityLabelString",
]
