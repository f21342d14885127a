"""Human- and machine-readable rendering of diff reports and trees.

Values are shown in their natural form: durations as elapsed time
(``5m0s``, ``250ms``), strings quoted, ABSENT as ``absent``. Output order is
report order, so rendering the same report twice is byte-identical.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from datetime import timedelta
from enum import Enum

from kubedrift.models.policy import OverridePolicy
from kubedrift.models.report import DiffReport, Discrepancy, FieldPath
from kubedrift.models.tree import ABSENT, NodeKind, as_elapsed, node_kind, record_fields

_KIND_WIDTH = len("schema_mismatch")

_UNITS_US = [
    ("h", 3_600_000_000),
    ("m", 60_000_000),
]


def format_duration(value: timedelta) -> str:
    """Format elapsed time the way Go prints a time.Duration.

    ``timedelta(minutes=5)`` -> ``5m0s``, ``timedelta(milliseconds=250)`` -> ``250ms``,
    ``timedelta(days=1)`` -> ``24h0m0s``.
    """
    total_us = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if total_us == 0:
        return "0s"
    sign = "-" if total_us < 0 else ""
    us = abs(total_us)
    if us < 1_000_000:
        if us % 1000 == 0:
            return f"{sign}{us // 1000}ms"
        if us >= 1000:
            return f"{sign}{_trim(us / 1000)}ms"
        return f"{sign}{us}µs"
    out = ""
    for unit, size in _UNITS_US:
        if us >= size or out:
            out += f"{us // size}{unit}"
            us %= size
    return f"{sign}{out}{_trim(us / 1_000_000)}s"


def _trim(number: float) -> str:
    return f"{number:.6f}".rstrip("0").rstrip(".")


def format_value(value: object, max_width: int = 0) -> str:
    """Render a tree value on one line; ``max_width`` > 0 truncates with '...'."""
    text = _format(value)
    if max_width > 0 and len(text) > max_width:
        return text[: max(max_width - 3, 1)] + "..."
    return text


def _format(value: object) -> str:
    if value is ABSENT:
        return "absent"
    elapsed = as_elapsed(value)
    if elapsed is not None:
        return format_duration(elapsed)
    kind = node_kind(value)
    if kind == NodeKind.RECORD:
        inner = ", ".join(f"{name}={_format(getattr(value, name))}" for name in record_fields(value))
        return f"{type(value).__name__}({inner})"
    if kind == NodeKind.MAPPING:
        items = sorted(value.items(), key=lambda kv: (type(kv[0]).__name__, str(kv[0])))  # type: ignore[attr-defined]
        return "{" + ", ".join(f"{k!r}: {_format(v)}" for k, v in items) + "}"
    if kind == NodeKind.SET:
        members = sorted(value, key=lambda m: (type(m).__name__, str(m)))  # type: ignore[call-overload]
        return "{" + ", ".join(_format(m) for m in members) + "}" if members else "set()"
    if kind == NodeKind.SEQUENCE:
        return "[" + ", ".join(_format(v) for v in value) + "]"  # type: ignore[attr-defined]
    if isinstance(value, Enum):
        return repr(value.value)
    return repr(value)


def _describe(d: Discrepancy, max_width: int) -> str:
    if d.note == "length":
        return f"length: expected {d.expected}, actual {d.actual}"
    return f"expected {format_value(d.expected, max_width)}, actual {format_value(d.actual, max_width)}"


def render(
    report: DiffReport,
    component: str | None = None,
    policy: OverridePolicy | None = None,
    upstream_version: str | None = None,
    max_value_width: int = 120,
) -> str:
    """Render *report* as text, one discrepancy per line in report order."""
    subject = f"{component} defaults" if component else "defaults"
    if report.is_empty:
        return f"{subject} match the snapshot"

    noun = "discrepancy" if len(report) == 1 else "discrepancies"
    against = f"snapshot ({upstream_version})" if upstream_version else "snapshot"
    lines = [f"{subject} drifted from {against}: {len(report)} {noun}"]
    for d in report:
        line = f"  {d.kind.value:<{_KIND_WIDTH}}  {d.path}: {_describe(d, max_value_width)}"
        ann = policy.lookup(d.path) if policy is not None else None
        if ann is not None:
            line += f"  [{ann.intent.value}{': ' + ann.note if ann.note else ''}]"
        lines.append(line)
    lines.append(
        "Reconcile the override policy with the new upstream defaults, "
        "then update the snapshot to match."
    )
    return "\n".join(lines)


def _jsonable(value: object) -> object:
    if value is ABSENT:
        return None
    elapsed = as_elapsed(value)
    if elapsed is not None:
        return format_duration(elapsed)
    kind = node_kind(value)
    if kind == NodeKind.RECORD:
        return {name: _jsonable(getattr(value, name)) for name in record_fields(value)}
    if kind == NodeKind.MAPPING:
        return {str(k): _jsonable(v) for k, v in value.items()}  # type: ignore[attr-defined]
    if kind in (NodeKind.SEQUENCE, NodeKind.SET):
        items = value if kind == NodeKind.SEQUENCE else sorted(value, key=str)  # type: ignore[call-overload]
        return [_jsonable(v) for v in items]  # type: ignore[attr-defined]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bool, int, float, str)) or value is None:
        return value
    return repr(value)


def _json_document(
    report: DiffReport,
    component: str | None,
    policy: OverridePolicy | None,
    upstream_version: str | None,
) -> dict[str, object]:
    entries = []
    for d in report:
        ann = policy.lookup(d.path) if policy is not None else None
        entries.append(
            {
                "path": str(d.path),
                "kind": d.kind.value,
                "expected": _jsonable(d.expected),
                "expected_present": d.expected is not ABSENT,
                "actual": _jsonable(d.actual),
                "actual_present": d.actual is not ABSENT,
                "note": d.note,
                "override": ann.intent.value if ann is not None else None,
            }
        )
    return {
        "component": component,
        "upstream_version": upstream_version,
        "drift": not report.is_empty,
        "discrepancies": entries,
    }


def render_json(
    report: DiffReport,
    component: str | None = None,
    policy: OverridePolicy | None = None,
    upstream_version: str | None = None,
) -> str:
    """Render *report* as a JSON document."""
    return json.dumps(_json_document(report, component, policy, upstream_version), indent=2)


def render_json_all(
    results: Iterable[tuple[str, DiffReport, OverridePolicy | None, str | None]],
) -> str:
    """Render several components' reports as one JSON document.

    *results* yields ``(component, report, policy, upstream_version)`` in
    check order; ``drift`` is true when any component drifted.
    """
    components = [_json_document(report, name, policy, version) for name, report, policy, version in results]
    doc = {
        "drift": any(c["drift"] for c in components),
        "components": components,
    }
    return json.dumps(doc, indent=2)


def iter_leaves(tree: object, path: FieldPath | None = None) -> Iterator[tuple[FieldPath, object]]:
    """Yield ``(path, value)`` for every leaf of *tree* in traversal order.

    Empty containers are leaves so they show up in listings.
    """
    path = path or FieldPath.root()
    kind = node_kind(tree)
    if kind == NodeKind.RECORD:
        for name in record_fields(tree):
            yield from iter_leaves(getattr(tree, name), path.attr(name))
    elif kind == NodeKind.MAPPING and tree:
        assert isinstance(tree, Mapping)
        for key in sorted(tree, key=lambda k: (type(k).__name__, str(k))):
            yield from iter_leaves(tree[key], path.key(key))
    elif kind == NodeKind.SEQUENCE and tree:
        for i, item in enumerate(tree):  # type: ignore[arg-type]
            yield from iter_leaves(item, path.index(i))
    else:
        yield path, tree


def render_tree(tree: object, max_value_width: int = 120) -> str:
    """Flattened ``path = value`` listing of *tree*."""
    return "\n".join(f"{path} = {format_value(value, max_value_width)}" for path, value in iter_leaves(tree))
