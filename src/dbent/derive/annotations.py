"""
Reading field annotations for the derive decorators.

String annotations are resolved with ``typing.get_type_hints`` on the
record class. When that fails, e.g. an annotation names a class that is not
defined yet or is malformed like ``Key[int, str]``, each annotation's source
expression is inspected with ``ast`` instead. Resolution is per class, so one
unresolvable field sends every string annotation of the class to the
fallback. The fallback only knows names as written: ``Key`` and ``Label``
are recognised literally, so an aliased import is detected only when
resolution succeeds.
"""

from __future__ import annotations

import ast
import typing
from dataclasses import dataclass
from typing import Annotated, Any, ForwardRef, NewType, TypeVar, get_args, get_origin

from dbent.derive.declaration import FieldDeclaration, RecordDeclaration
from dbent.key import Key
from dbent.markers import LabelTag


class Unresolved(Exception):
    """The annotation could not be evaluated; inspect its source instead."""


@dataclass(frozen=True)
class KeyShape:
    """What a field annotation says about the ``Key`` it should hold.

    ``problem`` is None for a well-formed ``Key[X]``; otherwise one of
    ``not_key``, ``no_argument``, ``not_single_argument``, ``not_a_type``.
    """

    argument: Any = None
    problem: str | None = None


def type_hints(record: RecordDeclaration) -> dict[str, Any]:
    """Resolved annotations of the record class, ``Annotated`` extras kept."""
    try:
        return typing.get_type_hints(record.cls, include_extras=True)
    except (NameError, AttributeError, TypeError, SyntaxError) as exc:
        raise Unresolved(record.cls.__qualname__) from exc


def evaluate(field: FieldDeclaration, record: RecordDeclaration) -> Any:
    """The field's annotation as an object. Raises ``Unresolved`` when it cannot be resolved."""
    if not isinstance(field.annotation, str):
        return field.annotation
    hints = type_hints(record)
    if field.name not in hints:
        raise Unresolved(field.annotation)
    return hints[field.name]


def _strip_annotated(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def is_type_form(argument: Any) -> bool:
    """True for anything usable as a type argument (classes, generics, unions, forward refs)."""
    return (
        isinstance(argument, (type, TypeVar, ForwardRef, NewType, str))
        or get_origin(argument) is not None
        or argument is Any
    )


def _key_shape_from_object(annotation: Any) -> KeyShape:
    annotation = _strip_annotated(annotation)
    if annotation is Key:
        return KeyShape(problem="no_argument")
    if get_origin(annotation) is not Key:
        return KeyShape(problem="not_key")
    args = get_args(annotation)
    if len(args) != 1:
        return KeyShape(problem="not_single_argument")
    if not is_type_form(args[0]):
        return KeyShape(problem="not_a_type")
    return KeyShape(argument=args[0])


# ---------------------------------------------------------------------------
# Source-expression fallback
# ---------------------------------------------------------------------------


def _name_of(node: ast.expr) -> str | None:
    """Last segment of a dotted name: ``dbent.Key`` -> ``Key``."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _parse(source: str) -> ast.expr:
    try:
        return ast.parse(source.strip(), mode="eval").body
    except SyntaxError:
        return ast.Constant(value=source)


def _annotated_parts(node: ast.expr) -> tuple[ast.expr, list[ast.expr]]:
    """Split ``Annotated[X, m1, m2]`` into ``X`` and ``[m1, m2]``."""
    if isinstance(node, ast.Subscript) and _name_of(node.value) == "Annotated":
        if isinstance(node.slice, ast.Tuple) and node.slice.elts:
            return node.slice.elts[0], list(node.slice.elts[1:])
    return node, []


def _key_shape_from_source(source: str) -> KeyShape:
    node, _ = _annotated_parts(_parse(source))
    if _name_of(node) == "Key":
        return KeyShape(problem="no_argument")
    if not isinstance(node, ast.Subscript) or _name_of(node.value) != "Key":
        return KeyShape(problem="not_key")
    if isinstance(node.slice, ast.Tuple):
        return KeyShape(problem="not_single_argument")
    argument = node.slice
    if isinstance(argument, ast.Constant) and not isinstance(argument.value, str):
        return KeyShape(problem="not_a_type")
    if isinstance(argument, ast.Constant):
        return KeyShape(argument=argument.value)
    return KeyShape(argument=ast.unparse(argument))


def key_shape(field: FieldDeclaration, record: RecordDeclaration) -> KeyShape:
    """Classify ``field``'s annotation as a ``Key[X]`` or say what is wrong with it."""
    try:
        return _key_shape_from_object(evaluate(field, record))
    except Unresolved:
        return _key_shape_from_source(field.annotation)


def _is_label_tag(node: ast.expr) -> bool:
    if isinstance(node, ast.Call):
        return _name_of(node.func) == "LabelTag"
    return _name_of(node) == "LABEL"


def _label_from_source(source: str) -> tuple[bool, Any]:
    node = _parse(source)
    if isinstance(node, ast.Subscript) and _name_of(node.value) == "Label":
        return True, ast.unparse(node.slice)
    inner, metadata = _annotated_parts(node)
    if any(_is_label_tag(item) for item in metadata):
        return True, ast.unparse(inner)
    return False, None


def label_marking(field: FieldDeclaration, record: RecordDeclaration) -> tuple[bool, Any]:
    """
    Whether ``field`` carries the label marker, and the label's type.

    The type is an object when the annotation could be evaluated and the
    annotation's source text otherwise.
    """
    if any(isinstance(item, LabelTag) for item in field.metadata):
        return True, field.annotation
    try:
        annotation = evaluate(field, record)
    except Unresolved:
        return _label_from_source(field.annotation)
    if get_origin(annotation) is Annotated and any(
        isinstance(item, LabelTag) for item in annotation.__metadata__
    ):
        return True, get_args(annotation)[0]
    return False, None


__all__ = [
    "KeyShape",
    "Unresolved",
    "evaluate",
    "type_hints",
    "is_type_form",
    "key_shape",
    "label_marking",
]
