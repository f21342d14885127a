"""Core data structures for kubedrift."""

from kubedrift.models.config import KubeDriftConfig
from kubedrift.models.policy import FieldAnnotation, OverrideIntent, OverridePolicy
from kubedrift.models.report import (
    DiffReport,
    Discrepancy,
    DiscrepancyKind,
    FieldPath,
    PathSegment,
    SegmentKind,
)
from kubedrift.models.snapshot import ComponentKind, Snapshot, freeze
from kubedrift.models.tree import ABSENT, Duration, NodeKind, StringFlag

__all__ = [
    "ABSENT",
    "ComponentKind",
    "DiffReport",
    "Discrepancy",
    "DiscrepancyKind",
    "Duration",
    "FieldAnnotation",
    "FieldPath",
    "KubeDriftConfig",
    "NodeKind",
    "OverrideIntent",
    "OverridePolicy",
    "PathSegment",
    "SegmentKind",
    "Snapshot",
    "StringFlag",
    "freeze",
]
