"""Record declarations shared by the test suite."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from dbent import Entity, EntityLabel, Key, Label, Many, Ok, keyed, labeled


@labeled
@keyed
@dataclass
class Customer:
    id: Key[int]
    name: Label[str]
    email: str = ""


@keyed
@dataclass
class Product:
    id: Key[str]
    title: str


@keyed
@dataclass
class OrderLine:
    id: Key[int]
    quantity: int
    product: Entity[str, Product] = field(default_factory=Entity.default)


@keyed
@dataclass
class Order:
    id: Key[int]
    customer: EntityLabel[int, Customer, str] = field(default_factory=EntityLabel.default)
    lines: Many[OrderLine] = field(default_factory=Many.not_fetched)


class Unlabeled:
    """Hand-written Keyed implementation, no label."""

    def __init__(self, ident: int | None):
        self.ident = Key(ident)

    def key(self):
        return Ok(self.ident)


# ---------------------------------------------------------------------------
# pydantic flavour, for serialization round trips
# ---------------------------------------------------------------------------


@labeled
@keyed
class CustomerModel(BaseModel):
    id: Key[int]
    name: Label[str]


@keyed
class ProductModel(BaseModel):
    id: Key[str]
    title: str


@keyed
class OrderModel(BaseModel):
    id: Key[int]
    customer: EntityLabel[int, CustomerModel, str] = Field(default_factory=EntityLabel.default)
    product: Entity[str, ProductModel] = Field(default_factory=Entity.default)
    lines: Many[ProductModel] = Field(default_factory=Many.default)
