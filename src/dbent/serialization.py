"""
pydantic core-schema builders shared by the dbent value types.

Each public container implements ``__get_pydantic_core_schema__`` by
delegating here, so any pydantic model or ``TypeAdapter`` holding a ``Key``,
``Entity``, ``EntityLabel`` or ``Many`` validates and dumps it without extra
configuration.

Wire shapes:
    ::

        Key[K]               5 | null                      (transparent)
        Entity[K, T]         {"key": k} | {"data": {...}} | {}
        EntityLabel[K, T, L] {"key": k, "label": l} | {"data": {...}} | {}
        Many[T]              {"data": [...]} | {"not_fetched": true} | {}

The active variant is the only thing encoded, so a dump followed by a
validate reproduces the same variant with the same payload.
"""

from __future__ import annotations

from typing import Any, Callable, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema


def type_arguments(source: Any, count: int) -> tuple[Any, ...]:
    """Type arguments of ``source``, padded with ``Any`` when unparameterised."""
    args = get_args(source)
    if len(args) != count:
        return (Any,) * count
    return args


def schema_for(handler: GetCoreSchemaHandler, tp: Any) -> CoreSchema:
    if tp is Any:
        return core_schema.any_schema()
    return handler.generate_schema(tp)


def key_schema(
    cls: type,
    source: Any,
    handler: GetCoreSchemaHandler,
) -> CoreSchema:
    """Schema for ``Key[K]``: the plain optional value on the wire."""
    (value_type,) = type_arguments(source, 1)
    inner = core_schema.nullable_schema(schema_for(handler, value_type))
    from_wire = core_schema.no_info_after_validator_function(cls, inner)
    return core_schema.json_or_python_schema(
        json_schema=from_wire,
        python_schema=core_schema.union_schema(
            [core_schema.is_instance_schema(cls), from_wire]
        ),
        serialization=core_schema.plain_serializer_function_ser_schema(
            lambda key: key.value,
            info_arg=False,
            return_schema=inner,
        ),
    )


def variant_schema(
    cls: type,
    fields: dict[str, CoreSchema],
    build: Callable[[dict[str, Any]], Any],
    dump: Callable[[Any], dict[str, Any]],
) -> CoreSchema:
    """
    Schema for a closed-variant container.

    ``fields`` lists every key any variant may emit, all optional; ``build``
    turns a validated dict into the matching variant (raising ValueError for
    a combination no variant produces) and ``dump`` does the reverse.
    """
    wire = core_schema.typed_dict_schema(
        {
            name: core_schema.typed_dict_field(schema, required=False)
            for name, schema in fields.items()
        },
        extra_behavior="forbid",
    )
    from_wire = core_schema.no_info_after_validator_function(build, wire)
    return core_schema.json_or_python_schema(
        json_schema=from_wire,
        python_schema=core_schema.union_schema(
            [core_schema.is_instance_schema(cls), from_wire]
        ),
        serialization=core_schema.plain_serializer_function_ser_schema(
            dump,
            info_arg=False,
            return_schema=wire,
        ),
    )


__all__ = [
    "type_arguments",
    "schema_for",
    "key_schema",
    "variant_schema",
]
