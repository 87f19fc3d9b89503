"""
``@labeled``: generate the Labeled capability from the field marked ``Label``.

Exactly one field must carry the marker, written either as
``name: Label[str]`` or ``name: Annotated[str, LABEL]``. Zero or several
marked fields is a ``DeriveError`` raised while the class is defined.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from dbent.derive.annotations import label_marking
from dbent.derive.declaration import declaration_of, reject
from dbent.derive.tagged import attach_tagged
from dbent.logging import get_logger
from dbent.result import Ok

logger = get_logger(__name__)

C = TypeVar("C", bound=type)


def _label_accessor(cls: type, field_name: str) -> Callable[[Any], Any]:
    def label(self):
        return Ok(getattr(self, field_name))

    label.__qualname__ = f"{cls.__qualname__}.label"
    label.__module__ = cls.__module__
    label.__doc__ = f"Returns the label held in ``{field_name}``."
    return label


def labeled(cls: C) -> C:
    """
    Class decorator generating ``label()`` from the single ``Label``-marked field.

    Raises:
        DeriveError: The declaration has zero or more than one marked field.
    """
    record = declaration_of(cls, "labeled")

    marked = []
    for field in record.fields:
        is_label, label_type = label_marking(field, record)
        if is_label:
            marked.append((field, label_type))

    if len(marked) != 1:
        raise reject(
            "labeled",
            f"needs to have 1 field marked with Label, found {len(marked)}",
            record.context,
            field=", ".join(field.name for field, _ in marked) or None,
        )

    field, label_type = marked[0]
    if field.name == "label":
        raise reject(
            "labeled",
            "cannot use a field named 'label'; it would shadow the generated label() accessor",
            record.context,
            field=field.name,
        )

    cls.label = _label_accessor(cls, field.name)
    cls.__label_type__ = label_type
    cls.__label_field__ = field.name
    logger.debug(
        "labeled_derived",
        record=record.context.record,
        module=record.context.module,
        field=field.name,
        label_type=str(label_type),
        kind=record.kind,
    )
    attach_tagged(cls)
    return cls


__all__ = ["labeled"]
