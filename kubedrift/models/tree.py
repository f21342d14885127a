"""Configuration tree value types and node classification.

A configuration tree is any nesting of:

    None                      -- unset optional (pointer-like) field
    bool / int / float / str  -- scalars
    timedelta / Duration      -- durations, compared by elapsed time
    list / tuple              -- ordered sequences
    set / frozenset           -- unordered member collections
    Mapping                   -- key -> tree
    dataclass instance        -- record of named fields, in declaration order
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, StrEnum


class _Absent:
    """Marks a field or key that does not exist on one side of a comparison."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Absent:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> _Absent:
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


@dataclass(frozen=True)
class Duration:
    """Record-shaped duration, as the upstream API types wrap time values."""

    duration: timedelta = timedelta(0)

    @classmethod
    def of(cls, **kwargs: float) -> Duration:
        """Build from timedelta keyword arguments: ``Duration.of(minutes=5)``."""
        return cls(timedelta(**kwargs))


@dataclass(frozen=True)
class StringFlag:
    """String command-line flag that remembers whether it was explicitly set."""

    value: str = ""
    provided: bool = False


def new_string_flag(value: str) -> StringFlag:
    """Flag holding a default value, not marked as provided."""
    return StringFlag(value=value, provided=False)


class NodeKind(StrEnum):
    """Structural kind of a configuration tree node."""

    NULL = "null"
    SCALAR = "scalar"
    RECORD = "record"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SET = "set"


class ScalarCategory(StrEnum):
    """Equality domain of a scalar value."""

    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    DURATION = "duration"
    OTHER = "other"


def as_elapsed(value: object) -> timedelta | None:
    """Return the elapsed time of a duration value, or None if it is not one."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, Duration):
        return value.duration
    return None


def is_record(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def node_kind(value: object) -> NodeKind:
    """Classify *value* by its structural kind.

    Durations are scalars even when they are record-shaped.
    """
    if value is None:
        return NodeKind.NULL
    if as_elapsed(value) is not None:
        return NodeKind.SCALAR
    if is_record(value):
        return NodeKind.RECORD
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, (set, frozenset)):
        return NodeKind.SET
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def scalar_category(value: object) -> ScalarCategory:
    # bool before int: bool is an int subclass but never equal to a number here
    if isinstance(value, bool):
        return ScalarCategory.BOOL
    if as_elapsed(value) is not None:
        return ScalarCategory.DURATION
    if isinstance(value, (int, float)) and not isinstance(value, Enum):
        return ScalarCategory.NUMBER
    if isinstance(value, str):
        return ScalarCategory.STRING
    return ScalarCategory.OTHER


def record_fields(value: object) -> list[str]:
    """Field names of a record in declaration order."""
    return [f.name for f in dataclasses.fields(value)]  # type: ignore[arg-type]
