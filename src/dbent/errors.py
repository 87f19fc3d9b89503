"""
Structured error types for dbent.

Two disjoint error domains live here. The run-time domain is a closed set of
"wrong state" failures returned (never raised) by the accessors of
``Entity``, ``EntityLabel`` and ``Many``. The definition-time domain is
``DeriveError``, raised by the ``@keyed`` / ``@labeled`` decorators when a
record declaration does not have the shape they need.

Manifesto:
    - **Closed run-time enumeration:** One error class per wrong-state query,
      each tagged with its ``ErrorKind``
    - **Errors as values:** Accessors return ``Err(error)``; callers decide
      whether to recover or propagate
    - **Diagnostics tied to source:** ``DeriveError`` carries the offending
      record's module, qualname, file and line
    - **Serialization-ready:** ``to_dict()`` for structured logging

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        DbentError                           │
        │             (category, context, cause, to_dict)             │
        ├──────────────────────────────┬──────────────────────────────┤
        │  StateError (kind)           │  DeriveError                 │
        │      │                       │  (DERIVE, source location)   │
        │  EntityError                 │                              │
        │    EntityEmptyError          │                              │
        │    EntityNotFetchedError     │                              │
        │  EntityLabelError            │                              │
        │    EntityLabelEmptyError     │                              │
        │    EntityLabelNotFetchedError│                              │
        │  ManyError                   │                              │
        │    ManyEmptyError            │                              │
        │    ManyNotFetchedError       │                              │
        └──────────────────────────────┴──────────────────────────────┘

Examples:
    >>> from dbent.errors import ManyNotFetchedError, ErrorKind
    >>> error = ManyNotFetchedError()
    >>> error.kind
    <ErrorKind.MANY_NOT_FETCHED: 'MANY_NOT_FETCHED'>
    >>> str(error)
    'data were not fetched from the database for this Many'

Tags:
    errors, error-hierarchy, diagnostics, dbent

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Error categories for classification and routing.

    Attributes:
        ENTITY: Wrong-state query on an ``Entity``
        ENTITY_LABEL: Wrong-state query on an ``EntityLabel``
        MANY: Wrong-state query on a ``Many``
        DERIVE: Record declaration rejected by a derive decorator
        INTERNAL: Bugs, unexpected state
    """

    ENTITY = "ENTITY"
    ENTITY_LABEL = "ENTITY_LABEL"
    MANY = "MANY"
    DERIVE = "DERIVE"
    INTERNAL = "INTERNAL"


class ErrorKind(str, Enum):
    """
    The closed enumeration of run-time failures.

    Every accessor that can observe a non-satisfying state reports exactly
    one of these kinds.

    Examples:
        >>> ErrorKind.ENTITY_EMPTY.value
        'ENTITY_EMPTY'
    """

    ENTITY_EMPTY = "ENTITY_EMPTY"
    ENTITY_NOT_FETCHED = "ENTITY_NOT_FETCHED"
    ENTITY_LABEL_EMPTY = "ENTITY_LABEL_EMPTY"
    ENTITY_LABEL_NOT_FETCHED = "ENTITY_LABEL_NOT_FETCHED"
    MANY_EMPTY = "MANY_EMPTY"
    MANY_NOT_FETCHED = "MANY_NOT_FETCHED"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only the fields relevant to an error are set; ``to_dict()`` drops the
    rest so log lines stay compact.

    Examples:
        >>> ctx = ErrorContext(record="app.models.Order", lineno=12)
        >>> ctx.to_dict()
        {'record': 'app.models.Order', 'lineno': 12}

    Attributes:
        record: Qualified name of the record class involved
        module: Module the record was declared in
        filename: Source file of the record declaration
        lineno: First line of the record declaration
        field: Name of the offending field, if any
        metadata: Additional key-value pairs
    """

    record: str | None = None
    module: str | None = None
    filename: str | None = None
    lineno: int | None = None
    field: str | None = None

    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["record", "module", "filename", "lineno", "field"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result

    def location(self) -> str | None:
        """Render ``file:line`` when the declaration was located."""
        if self.filename is None:
            return None
        if self.lineno is None:
            return self.filename
        return f"{self.filename}:{self.lineno}"


class DbentError(Exception):
    """
    Base exception for all dbent errors.

    Every error carries a ``category``, an ``ErrorContext`` and an optional
    chained ``cause``. Subclasses set ``default_category`` (and, for the
    run-time domain, ``default_message``) so they can be created without
    arguments.

    Examples:
        >>> error = DbentError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(record="Order").context.record
        'Order'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_message: str = "dbent error"

    def __init__(
        self,
        message: str | None = None,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> DbentError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(EntityEmptyError().with_context(record="Order"))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.message == other.message and self.context == other.context

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# RUN-TIME STATE ERRORS
# =============================================================================


class StateError(DbentError):
    """
    A query was made against a container in a state that cannot answer it.

    ``kind`` identifies which member of the closed enumeration this is, so
    callers can dispatch on it without an ``isinstance`` ladder.
    """

    kind: ErrorKind

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["kind"] = self.kind.value
        return result


class EntityError(StateError):
    """Wrong-state query on an ``Entity``."""

    default_category = ErrorCategory.ENTITY


class EntityEmptyError(EntityError):
    """Nothing set for this Entity."""

    kind = ErrorKind.ENTITY_EMPTY
    default_message = "nothing set for this Entity"


class EntityNotFetchedError(EntityError):
    """The Entity only holds a key; its record was never fetched."""

    kind = ErrorKind.ENTITY_NOT_FETCHED
    default_message = "data was not fetched from the database for this Entity"


class EntityLabelError(StateError):
    """Wrong-state query on an ``EntityLabel``."""

    default_category = ErrorCategory.ENTITY_LABEL


class EntityLabelEmptyError(EntityLabelError):
    """Nothing set for this EntityLabel."""

    kind = ErrorKind.ENTITY_LABEL_EMPTY
    default_message = "nothing set for this EntityLabel"


class EntityLabelNotFetchedError(EntityLabelError):
    """The EntityLabel only holds a key and label; its record was never fetched."""

    kind = ErrorKind.ENTITY_LABEL_NOT_FETCHED
    default_message = "data was not fetched from the database for this EntityLabel"


class ManyError(StateError):
    """Wrong-state query on a ``Many``."""

    default_category = ErrorCategory.MANY


class ManyEmptyError(ManyError):
    """No records set for this Many."""

    kind = ErrorKind.MANY_EMPTY
    default_message = "no data set for this Many"


class ManyNotFetchedError(ManyError):
    """
    The relationship exists but was not queried.

    This is the one callers most often recover from, by fetching now.
    """

    kind = ErrorKind.MANY_NOT_FETCHED
    default_message = "data were not fetched from the database for this Many"


# =============================================================================
# DEFINITION-TIME DIAGNOSTICS
# =============================================================================


class DeriveError(DbentError):
    """
    A record declaration was rejected by ``@keyed`` or ``@labeled``.

    Raised while the decorated class is being defined, so a declaration that
    cannot be validated never becomes usable. The message is prefixed with
    the source location when one could be found.
    """

    default_category = ErrorCategory.DERIVE
    default_message = "invalid record declaration"

    def __str__(self) -> str:
        location = self.context.location()
        if location is None:
            return self.message
        return f"{location}: {self.message}"


__all__ = [
    "ErrorCategory",
    "ErrorKind",
    "ErrorContext",
    "DbentError",
    "StateError",
    "EntityError",
    "EntityEmptyError",
    "EntityNotFetchedError",
    "EntityLabelError",
    "EntityLabelEmptyError",
    "EntityLabelNotFetchedError",
    "ManyError",
    "ManyEmptyError",
    "ManyNotFetchedError",
    "DeriveError",
]
