"""Structural differ for configuration trees.

``diff(expected, actual)`` walks both trees in lockstep and returns every
field-path discrepancy in a deterministic order:

* records     -- expected declaration order, then fields only actual declares
* mappings    -- union of keys sorted by (type name, str(key))
* sets        -- members sorted the same way
* sequences   -- length first, then index by index up to the shorter length

The walk is pure: it neither mutates its inputs nor logs.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping

from kubedrift.models.report import DiffReport, Discrepancy, DiscrepancyKind, FieldPath
from kubedrift.models.tree import (
    ABSENT,
    NodeKind,
    ScalarCategory,
    as_elapsed,
    node_kind,
    record_fields,
    scalar_category,
)


def diff(expected: object, actual: object) -> DiffReport:
    """Compare *actual* against *expected*; an empty report means no drift."""
    return DiffReport(tuple(_walk(expected, actual, FieldPath.root())))


def _sort_key(key: object) -> tuple[str, str]:
    return (type(key).__name__, str(key))


def _ordered(keys: Iterable[object]) -> list[object]:
    return sorted(keys, key=_sort_key)


def _walk(expected: object, actual: object, path: FieldPath) -> Iterator[Discrepancy]:
    exp_kind = node_kind(expected)
    act_kind = node_kind(actual)

    # Optional fields: presence is compared before anything else.
    if exp_kind == NodeKind.NULL or act_kind == NodeKind.NULL:
        if exp_kind != act_kind:
            yield Discrepancy(path, DiscrepancyKind.CHANGED, expected, actual)
        return

    if exp_kind != act_kind:
        yield Discrepancy(path, DiscrepancyKind.SCHEMA_MISMATCH, expected, actual)
        return

    if exp_kind == NodeKind.SCALAR:
        yield from _diff_scalar(expected, actual, path)
    elif exp_kind == NodeKind.RECORD:
        yield from _diff_record(expected, actual, path)
    elif exp_kind == NodeKind.MAPPING:
        yield from _diff_mapping(expected, actual, path)  # type: ignore[arg-type]
    elif exp_kind == NodeKind.SET:
        yield from _diff_set(expected, actual, path)  # type: ignore[arg-type]
    else:
        yield from _diff_sequence(expected, actual, path)  # type: ignore[arg-type]


def _diff_scalar(expected: object, actual: object, path: FieldPath) -> Iterator[Discrepancy]:
    exp_cat = scalar_category(expected)
    act_cat = scalar_category(actual)
    if exp_cat != act_cat or (exp_cat == ScalarCategory.OTHER and type(expected) is not type(actual)):
        yield Discrepancy(path, DiscrepancyKind.SCHEMA_MISMATCH, expected, actual)
        return
    if not _scalar_equal(expected, actual, exp_cat):
        yield Discrepancy(path, DiscrepancyKind.CHANGED, expected, actual)


def _scalar_equal(expected: object, actual: object, category: ScalarCategory) -> bool:
    if category == ScalarCategory.DURATION:
        return as_elapsed(expected) == as_elapsed(actual)
    if category == ScalarCategory.NUMBER:
        # NaN defaults are equal to each other, unlike under ==
        if isinstance(expected, float) and isinstance(actual, float) and math.isnan(expected) and math.isnan(actual):
            return True
        return expected == actual
    if category == ScalarCategory.STRING:
        return str(expected) == str(actual)
    return expected == actual


def _diff_record(expected: object, actual: object, path: FieldPath) -> Iterator[Discrepancy]:
    exp_fields = record_fields(expected)
    act_fields = record_fields(actual)
    act_set = set(act_fields)
    for name in exp_fields:
        child = path.attr(name)
        if name not in act_set:
            yield Discrepancy(child, DiscrepancyKind.MISSING, getattr(expected, name), ABSENT)
            continue
        yield from _walk(getattr(expected, name), getattr(actual, name), child)
    exp_set = set(exp_fields)
    for name in act_fields:
        if name not in exp_set:
            yield Discrepancy(path.attr(name), DiscrepancyKind.ADDED, ABSENT, getattr(actual, name))


def _diff_mapping(
    expected: Mapping[object, object],
    actual: Mapping[object, object],
    path: FieldPath,
) -> Iterator[Discrepancy]:
    for key in _ordered(set(expected) | set(actual)):
        child = path.key(key)
        if key not in actual:
            yield Discrepancy(child, DiscrepancyKind.MISSING, expected[key], ABSENT)
        elif key not in expected:
            yield Discrepancy(child, DiscrepancyKind.ADDED, ABSENT, actual[key])
        else:
            yield from _walk(expected[key], actual[key], child)


def _diff_set(
    expected: set[object] | frozenset[object],
    actual: set[object] | frozenset[object],
    path: FieldPath,
) -> Iterator[Discrepancy]:
    for member in _ordered(expected ^ actual):
        if member in expected:
            yield Discrepancy(path.key(member), DiscrepancyKind.MISSING, member, ABSENT)
        else:
            yield Discrepancy(path.key(member), DiscrepancyKind.ADDED, ABSENT, member)


def _diff_sequence(
    expected: list[object] | tuple[object, ...],
    actual: list[object] | tuple[object, ...],
    path: FieldPath,
) -> Iterator[Discrepancy]:
    if len(expected) != len(actual):
        yield Discrepancy(path, DiscrepancyKind.CHANGED, len(expected), len(actual), note="length")
    for i, (exp_item, act_item) in enumerate(zip(expected, actual, strict=False)):
        yield from _walk(exp_item, act_item, path.index(i))
