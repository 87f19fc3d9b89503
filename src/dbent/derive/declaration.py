"""
Record declarations as seen by the derive decorators.

A declaration is the ordered list of a class's named fields, read without
instantiating anything. Three kinds of class qualify:

    dataclass         dataclasses.fields(cls)
    pydantic model    cls.model_fields
    annotated class   inspect.get_annotations(cls)   (NamedTuple, plain classes)

Anything else (functions, instances, enums) is not a structure with named
fields and is rejected with a ``DeriveError``.
"""

from __future__ import annotations

import dataclasses
import enum
import inspect
from dataclasses import dataclass
from typing import Any, ClassVar, get_origin

from pydantic import BaseModel

from dbent.errors import DeriveError, ErrorContext
from dbent.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldDeclaration:
    """One named field: its annotation as written, plus metadata pydantic split off."""

    name: str
    annotation: Any
    metadata: tuple[Any, ...] = ()


@dataclass(frozen=True)
class RecordDeclaration:
    cls: type
    kind: str
    fields: tuple[FieldDeclaration, ...]
    context: ErrorContext

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


def locate(target: Any) -> ErrorContext:
    """Source location of ``target`` for diagnostics; best effort."""
    context = ErrorContext(
        record=getattr(target, "__qualname__", None) or repr(target),
        module=getattr(target, "__module__", None),
    )
    try:
        context.filename = inspect.getsourcefile(target)
        context.lineno = inspect.getsourcelines(target)[1]
    except (OSError, TypeError):
        # Defined in a REPL, exec'd, or not a class at all.
        pass
    return context


def reject(
    decorator: str,
    message: str,
    context: ErrorContext,
    *,
    field: str | None = None,
) -> DeriveError:
    """Build the diagnostic for a rejected declaration and log it."""
    error = DeriveError(
        f"@{decorator} {message}",
        context=ErrorContext(
            record=context.record,
            module=context.module,
            filename=context.filename,
            lineno=context.lineno,
            field=field,
        ),
    )
    logger.warning("derive_rejected", decorator=decorator, **error.to_dict())
    return error


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _dataclass_fields(cls: type) -> list[FieldDeclaration]:
    return [FieldDeclaration(f.name, f.type) for f in dataclasses.fields(cls)]


def _model_fields(cls: type[BaseModel]) -> list[FieldDeclaration]:
    return [
        FieldDeclaration(name, info.annotation, tuple(info.metadata))
        for name, info in cls.model_fields.items()
    ]


def _annotated_fields(cls: type) -> list[FieldDeclaration]:
    return [
        FieldDeclaration(name, annotation)
        for name, annotation in inspect.get_annotations(cls).items()
        if not _is_class_var(annotation)
    ]


def declaration_of(target: Any, decorator: str) -> RecordDeclaration:
    """
    Read the field layout of ``target``.

    Raises:
        DeriveError: ``target`` is not a class with named fields.
    """
    context = locate(target)
    if not inspect.isclass(target):
        raise reject(decorator, "can only be used on classes", context)
    if issubclass(target, enum.Enum):
        raise reject(
            decorator,
            "can only be used on classes with named fields, not enums",
            context,
        )

    if dataclasses.is_dataclass(target):
        kind, fields = "dataclass", _dataclass_fields(target)
    elif issubclass(target, BaseModel):
        kind, fields = "pydantic", _model_fields(target)
    else:
        kind, fields = "annotations", _annotated_fields(target)

    return RecordDeclaration(
        cls=target,
        kind=kind,
        fields=tuple(fields),
        context=context,
    )


__all__ = [
    "FieldDeclaration",
    "RecordDeclaration",
    "declaration_of",
    "locate",
    "reject",
]
