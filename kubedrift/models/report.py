"""Field paths, discrepancies and diff reports."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from kubedrift.models.tree import ABSENT, is_record


class SegmentKind(StrEnum):
    """How a path segment addresses its parent node."""

    ATTR = "attr"
    KEY = "key"
    INDEX = "index"


@dataclass(frozen=True)
class PathSegment:
    """One accessor inside a field path."""

    kind: SegmentKind
    value: object

    def __str__(self) -> str:
        if self.kind == SegmentKind.ATTR:
            return str(self.value)
        if self.kind == SegmentKind.INDEX:
            return f"[{self.value}]"
        return f"[{self.value!r}]"


@dataclass(frozen=True)
class FieldPath:
    """Stable address of a location inside a configuration tree.

    Rendered as ``kubelet_configuration.node_labels['zone']`` or ``args[0]``;
    the empty path renders as ``<root>``.
    """

    segments: tuple[PathSegment, ...] = ()

    @classmethod
    def root(cls) -> FieldPath:
        return cls()

    @classmethod
    def of(cls, *names: str) -> FieldPath:
        """Path made only of attribute accessors."""
        return cls(tuple(PathSegment(SegmentKind.ATTR, n) for n in names))

    @classmethod
    def parse(cls, dotted: str) -> FieldPath:
        """Parse a dotted attribute path such as ``kubelet_configuration.port``."""
        if not dotted or dotted == "<root>":
            return cls()
        names = dotted.split(".")
        if any(not n for n in names):
            raise ValueError(f"Invalid field path: {dotted!r}")
        return cls.of(*names)

    def attr(self, name: str) -> FieldPath:
        return FieldPath((*self.segments, PathSegment(SegmentKind.ATTR, name)))

    def key(self, key: object) -> FieldPath:
        return FieldPath((*self.segments, PathSegment(SegmentKind.KEY, key)))

    def index(self, index: int) -> FieldPath:
        return FieldPath((*self.segments, PathSegment(SegmentKind.INDEX, index)))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def ancestors(self) -> list[FieldPath]:
        """This path followed by each of its prefixes, longest first, root last."""
        return [FieldPath(self.segments[:n]) for n in range(len(self.segments), -1, -1)]

    def lookup(self, tree: object) -> object:
        """Resolve this path in *tree*; ABSENT when any accessor does not resolve."""
        node = tree
        for seg in self.segments:
            if seg.kind == SegmentKind.ATTR:
                if not is_record(node) or seg.value not in {f.name for f in dataclasses.fields(node)}:  # type: ignore[arg-type]
                    return ABSENT
                node = getattr(node, str(seg.value))
            elif seg.kind == SegmentKind.KEY:
                if not isinstance(node, Mapping) or seg.value not in node:
                    return ABSENT
                node = node[seg.value]
            else:
                if not isinstance(node, (list, tuple)) or not 0 <= int(seg.value) < len(node):  # type: ignore[call-overload]
                    return ABSENT
                node = node[int(seg.value)]  # type: ignore[call-overload]
        return node

    def __str__(self) -> str:
        if not self.segments:
            return "<root>"
        out = ""
        for seg in self.segments:
            if seg.kind == SegmentKind.ATTR and out:
                out += "."
            out += str(seg)
        return out


class DiscrepancyKind(StrEnum):
    """Classification of a single difference between two trees."""

    MISSING = "missing"  # present in expected only
    ADDED = "added"  # present in actual only
    CHANGED = "changed"
    SCHEMA_MISMATCH = "schema_mismatch"  # node kinds or scalar categories differ


@dataclass(frozen=True)
class Discrepancy:
    """A difference at one field path.

    ``expected``/``actual`` hold ABSENT on the side where the location does
    not exist. ``note`` is ``"length"`` for sequence length discrepancies, in
    which case both values are the sequence lengths.
    """

    path: FieldPath
    kind: DiscrepancyKind
    expected: object = ABSENT
    actual: object = ABSENT
    note: str = ""


@dataclass(frozen=True)
class DiffReport:
    """Ordered discrepancies from one comparison. Empty means no drift."""

    discrepancies: tuple[Discrepancy, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.discrepancies

    def count(self, kind: DiscrepancyKind) -> int:
        return sum(1 for d in self.discrepancies if d.kind == kind)

    def paths(self) -> list[str]:
        return [str(d.path) for d in self.discrepancies]

    def __iter__(self) -> Iterator[Discrepancy]:
        return iter(self.discrepancies)

    def __len__(self) -> int:
        return len(self.discrepancies)

    def __bool__(self) -> bool:
        return bool(self.discrepancies)

    def __getitem__(self, index: int) -> Discrepancy:
        return self.discrepancies[index]
