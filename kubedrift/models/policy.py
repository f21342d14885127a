"""Override intent annotations attached to a snapshot.

Annotations record what the node-config builder does with each upstream
default. They are informational: the guard prints them next to matching
discrepancies but never suppresses or downgrades a discrepancy because of one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from kubedrift.models.report import FieldPath
from kubedrift.models.tree import ABSENT


class OverrideIntent(StrEnum):
    """What the builder does with an upstream default."""

    OVERRIDDEN = "overridden"  # replaced with our own value
    DISABLED = "disabled"  # feature turned off
    FORCED = "forced"  # pinned to a fixed value regardless of input
    CONDITIONAL = "conditional"  # overridden only under some deployment condition


@dataclass(frozen=True)
class FieldAnnotation:
    """Intent for one field path (and everything beneath it)."""

    path: str
    intent: OverrideIntent
    note: str = ""

    @property
    def field_path(self) -> FieldPath:
        return FieldPath.parse(self.path)


@dataclass(frozen=True)
class OverridePolicy:
    """Set of annotations keyed by dotted field path."""

    annotations: tuple[FieldAnnotation, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for ann in self.annotations:
            if ann.path in seen:
                raise ValueError(f"Duplicate override annotation for {ann.path!r}")
            FieldPath.parse(ann.path)
            seen.add(ann.path)

    def lookup(self, path: FieldPath) -> FieldAnnotation | None:
        """Most specific annotation on *path* or one of its ancestors."""
        by_path = {a.path: a for a in self.annotations}
        for candidate in path.ancestors():
            ann = by_path.get(str(candidate))
            if ann is not None:
                return ann
        return None

    def unresolved(self, tree: object) -> list[FieldAnnotation]:
        """Annotations whose path no longer exists in *tree*."""
        return [a for a in self.annotations if a.field_path.lookup(tree) is ABSENT]

    def __len__(self) -> int:
        return len(self.annotations)


def annotate(intent: OverrideIntent, *paths: str, note: str = "") -> tuple[FieldAnnotation, ...]:
    """Build annotations sharing one intent."""
    return tuple(FieldAnnotation(path=p, intent=intent, note=note) for p in paths)
