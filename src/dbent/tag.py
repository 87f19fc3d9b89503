"""
The Tag value and the blanket Tagged implementation.

``Tag`` is the textual ``(key, label)`` pair a list view or a select box
needs. Any object that is both ``Keyed`` and ``Labeled`` can produce one:
``tag()`` and ``has_tag()`` here work on such objects directly, and
``TaggedMixin`` exposes them as methods.

Examples:
    >>> from dbent import EntityLabel, Key
    >>> ref = EntityLabel.from_key_label(Key.new(3), "Ada")
    >>> ref.tag().unwrap()
    Tag(key='3', label='Ada')
    >>> EntityLabel.from_key_label(Key(), "Ada").has_tag()
    False
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from dbent.result import Result


@dataclass(frozen=True, slots=True)
class Tag:
    """Struct that holds both key and label as text."""

    key: str = ""
    label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def tag(entity: Any) -> Result[Tag]:
    """
    Render ``entity``'s key and label as a ``Tag``.

    Fails with whichever error ``key()`` (checked first) or ``label()``
    returns. A present key renders as its value, an absent one as ``"None"``.
    """
    return entity.key().flat_map(
        lambda key: entity.label().map(
            lambda label: Tag(key=str(key), label=str(label))
        )
    )


def has_tag(entity: Any) -> bool:
    """True iff ``entity.key()`` succeeds and yields a present key."""
    return entity.key().map(lambda key: key.is_some()).unwrap_or(False)


class TaggedMixin:
    """Adds ``tag()`` / ``has_tag()`` to a class that has ``key()`` and ``label()``."""

    __slots__ = ()

    def tag(self) -> Result[Tag]:
        return tag(self)

    def has_tag(self) -> bool:
        return has_tag(self)


__all__ = [
    "Tag",
    "TaggedMixin",
    "tag",
    "has_tag",
]
