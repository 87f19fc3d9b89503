"""
Capability protocols for dbent records and containers.

A record type declares nothing: it *is* ``Keyed`` when it has a ``key()``
method returning ``Result[Key[K]]``, and ``Labeled`` when it has a
``label()`` method returning ``Result[L]``. ``Tagged`` is the derived
capability every type satisfying both gets through ``TaggedMixin`` or the
``tag()`` / ``has_tag()`` functions in ``dbent.tag``.

Manifesto:
    Protocols define contracts without inheritance. They enable:
    - **Decoupling:** Containers delegate to any record with the right shape
    - **Structural composition:** Keyed + Labeled implies Tagged
    - **Testability:** A hand-written record and a ``@keyed`` one are
      interchangeable

Architecture:
    ::

        protocols.py
        ├── Keyed     : key()   -> Result[Key[K]]
        ├── Labeled   : label() -> Result[L]
        └── Tagged    : tag()   -> Result[Tag], has_tag() -> bool

    Implementations:
        @keyed records, @labeled records (dbent.derive)
        Entity (Keyed), EntityLabel (Keyed + Labeled + Tagged)

Contract:
    ``key()`` returns the ``Key`` even when its inner value is absent; it
    fails only when the implementing container holds no identifier
    information at all (an empty union).

Tags:
    protocol, capability, keyed, labeled, tagged, dbent

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from dbent.key import Key
    from dbent.result import Result
    from dbent.tag import Tag


K = TypeVar("K")
L = TypeVar("L")


@runtime_checkable
class Keyed(Protocol[K]):
    """
    Anything that can report its primary key.

    Examples:
        >>> from dbent import Entity, Key
        >>> isinstance(Entity.from_key(Key.new(1)), Keyed)
        True
    """

    def key(self) -> Result[Key[K]]:
        """Returns the Key for the entity."""
        ...


@runtime_checkable
class Labeled(Protocol[L]):
    """Anything that can report a display label."""

    def label(self) -> Result[L]:
        """Returns the label for the entity."""
        ...


@runtime_checkable
class Tagged(Protocol):
    """Anything that can render its key and label together as a ``Tag``."""

    def tag(self) -> Result[Tag]:
        ...

    def has_tag(self) -> bool:
        """The entity does not have a valid tag if it doesn't have a Key."""
        ...


__all__ = [
    "Keyed",
    "Labeled",
    "Tagged",
]
