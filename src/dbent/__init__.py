"""
dbent - Database entity reference types.

Typed placeholders for the relationships of records mapped from database
rows: a to-one reference that is a key, the fetched record or nothing
(``Entity``), the same with a cached label (``EntityLabel``), and a to-many
collection that is loaded, not fetched or nothing (``Many``). The ``@keyed``
and ``@labeled`` decorators generate the capabilities those containers
delegate to.

Module Map
----------
    errors.py        Error hierarchy (StateError kinds, DeriveError)
    result.py        Result[T] envelope (Ok / Err)
    key.py           Key[K] identifier wrapper
    protocols.py     Keyed / Labeled / Tagged capability protocols
    tag.py           Tag value + blanket Tagged implementation
    entity.py        Entity[K, T]
    entity_label.py  EntityLabel[K, T, L]
    many.py          Many[T]
    markers.py       Label[T] field marker
    derive/          @keyed / @labeled class decorators
    serialization.py pydantic core schemas
    adapters/        sqlite3 column adapter
    aliases.py       EntityInt, EntityLabelString, ...
    logging.py       structlog configuration
    settings.py      DBENT_* environment settings

Example::

    from dataclasses import dataclass, field
    from dbent import Entity, Key, Label, Many, keyed, labeled

    @labeled
    @keyed
    @dataclass
    class Customer:
        id: Key[int]
        name: Label[str]

    @keyed
    @dataclass
    class Order:
        id: Key[int]
        customer: Entity[int, Customer] = field(default_factory=Entity.default)
        lines: Many[str] = field(default_factory=Many.not_fetched)
"""

from dbent.aliases import EntityInt, EntityLabelInt, EntityLabelString, EntityString, Int
from dbent.derive import keyed, labeled
from dbent.entity import Entity, EntityData, EntityKey, EntityNone
from dbent.entity_label import EntityLabel, EntityLabelData, EntityLabelKey, EntityLabelNone
from dbent.errors import (
    DbentError,
    DeriveError,
    EntityEmptyError,
    EntityLabelEmptyError,
    EntityLabelNotFetchedError,
    EntityNotFetchedError,
    ErrorKind,
    ManyEmptyError,
    ManyNotFetchedError,
    StateError,
)
from dbent.key import Key
from dbent.many import Many, ManyData, ManyNone, ManyNotFetched
from dbent.markers import LABEL, Label, LabelTag
from dbent.protocols import Keyed, Labeled, Tagged
from dbent.result import Err, Ok, Result
from dbent.tag import Tag, TaggedMixin, has_tag, tag

__version__ = "0.1.1"

__all__ = [
    # Identifier
    "Key",
    # Capabilities
    "Keyed",
    "Labeled",
    "Tagged",
    "Tag",
    "TaggedMixin",
    "tag",
    "has_tag",
    # Containers
    "Entity",
    "EntityKey",
    "EntityData",
    "EntityNone",
    "EntityLabel",
    "EntityLabelKey",
    "EntityLabelData",
    "EntityLabelNone",
    "Many",
    "ManyData",
    "ManyNotFetched",
    "ManyNone",
    # Derive
    "keyed",
    "labeled",
    "Label",
    "LABEL",
    "LabelTag",
    # Result
    "Result",
    "Ok",
    "Err",
    # Errors
    "DbentError",
    "StateError",
    "ErrorKind",
    "EntityEmptyError",
    "EntityNotFetchedError",
    "EntityLabelEmptyError",
    "EntityLabelNotFetchedError",
    "ManyEmptyError",
    "ManyNotFetchedError",
    "DeriveError",
    # Aliases
    "Int",
    "EntityInt",
    "EntityString",
    "EntityLabelInt",
    "EntityLabelString",
]
