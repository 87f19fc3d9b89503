"""
``@keyed``: generate the Keyed capability from a record's first field.

Manifesto:
    The primary key is the first thing a row declares, so the decorator
    insists on it: the first declared field must be a ``Key[X]``. Getting
    that wrong is a definition-time ``DeriveError``, never a surprise the
    first time ``key()`` is called.

Architecture:
    ::

        @keyed
        @dataclass
        class Customer:
            id: Key[int]          ← first field, Key with one type argument
            name: str

        generates:
            Customer.key(self)    → Ok(self.id)
            Customer.__key_type__ = int
            Customer.__key_field__ = "id"

Diagnostics:
    - not a class / an enum              "can only be used on classes ..."
    - no fields                           "needs at least a single Key field defined"
    - first field not a Key               "needs the first field to be a Key ..."
    - bare Key                            "needs the Key to define a single generic argument type"
    - Key[A, B]                           "needs the Key to define a single generic argument type"
    - Key[3]                              "only supports types as generic argument for Key"
    - first field named ``key``           "... would shadow the generated key() accessor"

Tags:
    derive, code-generation, keyed, decorator, dbent
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from dbent.derive.annotations import key_shape
from dbent.derive.declaration import declaration_of, reject
from dbent.derive.tagged import attach_tagged
from dbent.logging import get_logger
from dbent.result import Ok

logger = get_logger(__name__)

C = TypeVar("C", bound=type)

_PROBLEMS = {
    "not_key": (
        "needs the first field to be a Key; aliasing the Key to something "
        "else breaks detection when the annotation cannot be evaluated"
    ),
    "no_argument": "needs the Key to define a single generic argument type",
    "not_single_argument": "needs the Key to define a single generic argument type",
    "not_a_type": "only supports types as generic argument for Key",
}


def _key_accessor(cls: type, field_name: str) -> Callable[[Any], Any]:
    def key(self):
        return Ok(getattr(self, field_name))

    key.__qualname__ = f"{cls.__qualname__}.key"
    key.__module__ = cls.__module__
    key.__doc__ = f"Returns the Key held in ``{field_name}``."
    return key


def keyed(cls: C) -> C:
    """
    Class decorator generating ``key()`` from the first declared field.

    Raises:
        DeriveError: The declaration does not start with a ``Key[X]`` field.
    """
    record = declaration_of(cls, "keyed")
    if not record.fields:
        raise reject("keyed", "needs at least a single Key field defined", record.context)

    first = record.fields[0]
    shape = key_shape(first, record)
    if shape.problem is not None:
        raise reject("keyed", _PROBLEMS[shape.problem], record.context, field=first.name)
    if first.name == "key":
        raise reject(
            "keyed",
            "cannot use a field named 'key'; it would shadow the generated key() accessor",
            record.context,
            field=first.name,
        )

    cls.key = _key_accessor(cls, first.name)
    cls.__key_type__ = shape.argument
    cls.__key_field__ = first.name
    logger.debug(
        "keyed_derived",
        record=record.context.record,
        module=record.context.module,
        field=first.name,
        key_type=str(shape.argument),
        kind=record.kind,
    )
    attach_tagged(cls)
    return cls


__all__ = ["keyed"]
