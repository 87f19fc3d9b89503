"""Attach the blanket Tagged implementation once a class is both Keyed and Labeled."""

from __future__ import annotations

from dbent.logging import get_logger
from dbent.tag import TaggedMixin

logger = get_logger(__name__)

_TAGGED_MEMBERS = ("tag", "has_tag")


def attach_tagged(cls: type) -> bool:
    """
    Give ``cls`` ``tag()`` and ``has_tag()`` if it has ``key()`` and ``label()``.

    Members the class already defines are left alone. Returns True when the
    blanket implementation was attached.
    """
    if not (callable(getattr(cls, "key", None)) and callable(getattr(cls, "label", None))):
        return False
    if any(name in vars(cls) for name in _TAGGED_MEMBERS):
        return False
    for name in _TAGGED_MEMBERS:
        setattr(cls, name, vars(TaggedMixin)[name])
    logger.debug("tagged_derived", record=cls.__qualname__, module=cls.__module__)
    return True


__all__ = ["attach_tagged"]
