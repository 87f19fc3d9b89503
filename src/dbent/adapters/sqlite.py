"""
sqlite3 column adapter for ``Key``.

Writing: a present key binds as its value, an absent one as ``NULL``.
Reading: ``convert_key`` turns a column value back into a ``Key``, ``NULL``
becoming the absent key.

Examples:
    >>> import sqlite3
    >>> from dbent import Key
    >>> register_adapters()
    >>> conn = sqlite3.connect(":memory:")
    >>> _ = conn.execute("CREATE TABLE customer (id INTEGER, name TEXT)")
    >>> _ = conn.execute("INSERT INTO customer VALUES (?, ?)", (Key.new(7), "Ada"))
    >>> _ = conn.execute("INSERT INTO customer VALUES (?, ?)", (Key(), "Bob"))
    >>> [convert_key(row[0]) for row in conn.execute("SELECT id FROM customer")]
    [Key(7), Key()]
"""

from __future__ import annotations

import sqlite3
from typing import Any, Callable, TypeVar

from dbent.key import Key
from dbent.logging import get_logger

logger = get_logger(__name__)

K = TypeVar("K")


def adapt_key(key: Key[Any]) -> Any:
    """The value sqlite3 should bind for ``key``; None binds as NULL."""
    return key.value


def convert_key(
    value: Any,
    converter: Callable[[Any], K] | None = None,
) -> Key[K]:
    """
    Build a ``Key`` from a column value.

    ``converter`` is applied to non-NULL values only, e.g. ``UUID`` for ids
    stored as text.
    """
    if value is None:
        return Key()
    if converter is not None:
        value = converter(value)
    return Key(value)


def key_row_factory(*key_columns: str) -> Callable[[sqlite3.Cursor, tuple], dict[str, Any]]:
    """
    Row factory producing dicts whose ``key_columns`` hold ``Key`` values.

    Usage:
        conn.row_factory = key_row_factory("id", "customer_id")
    """
    wanted = set(key_columns)

    def factory(cursor: sqlite3.Cursor, row: tuple) -> dict[str, Any]:
        result = {}
        for (name, *_), value in zip(cursor.description, row):
            result[name] = convert_key(value) if name in wanted else value
        return result

    return factory


def register_adapters() -> None:
    """Teach the sqlite3 module to bind ``Key`` parameters."""
    sqlite3.register_adapter(Key, adapt_key)
    logger.debug("sqlite_adapters_registered", types=["Key"])


__all__ = [
    "adapt_key",
    "convert_key",
    "key_row_factory",
    "register_adapters",
]
