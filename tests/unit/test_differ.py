"""Tests for the structural differ.

Covers scalars, durations, optional fields, records (including schema
evolution), mappings, sets, sequences and deterministic ordering.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType

from kubedrift.differ import diff
from kubedrift.models.report import Discrepancy, DiscrepancyKind, FieldPath
from kubedrift.models.tree import ABSENT, Duration, StringFlag

# ---------------------------------------------------------------------------
# Sample schema
# ---------------------------------------------------------------------------


@dataclass
class _Inner:
    period: Duration = field(default_factory=Duration)
    labels: dict[str, str] = field(default_factory=dict)
    oom_score_adj: int | None = None


@dataclass
class _Server:
    port: int = 0
    address: str = ""
    qps: float = 0.0
    enabled: bool = False
    flag: StringFlag = field(default_factory=StringFlag)
    args: list[str] = field(default_factory=list)
    inner: _Inner = field(default_factory=_Inner)


@dataclass
class _ServerV2:
    """_Server with ``address`` removed and ``bind_port`` added upstream."""

    port: int = 0
    qps: float = 0.0
    enabled: bool = False
    flag: StringFlag = field(default_factory=StringFlag)
    args: list[str] = field(default_factory=list)
    inner: _Inner = field(default_factory=_Inner)
    bind_port: int = 0


def _server(**kwargs: object) -> _Server:
    base = _Server(
        port=10250,
        address="0.0.0.0",
        qps=5.0,
        enabled=True,
        flag=StringFlag("/var/lib/kubelet/kubeconfig"),
        args=["--v=2", "--logtostderr"],
        inner=_Inner(
            period=Duration(timedelta(minutes=5)),
            labels={"zone": "a", "role": "node"},
            oom_score_adj=-999,
        ),
    )
    for key, value in kwargs.items():
        setattr(base, key, value)
    return base


# =====================================================================
# Equality
# =====================================================================


class TestEqualTrees:
    def test_identical_trees_produce_empty_report(self) -> None:
        report = diff(_server(), _server())
        assert report.is_empty
        assert len(report) == 0
        assert not report

    def test_deep_copy_with_nested_maps_and_absent_optionals(self) -> None:
        expected = _server(inner=_Inner(labels={"a": "1"}, oom_score_adj=None))
        actual = copy.deepcopy(expected)
        assert diff(expected, actual).is_empty

    def test_zero_value_trees_produce_empty_report(self) -> None:
        assert diff(_Server(), _Server()).is_empty

    def test_equivalent_durations_are_equal(self) -> None:
        expected = _server(inner=_Inner(period=Duration(timedelta(minutes=1))))
        actual = _server(inner=_Inner(period=Duration(timedelta(seconds=60))))
        assert diff(expected, actual).is_empty

    def test_wrapped_and_bare_durations_compare_by_elapsed_time(self) -> None:
        assert diff(Duration.of(minutes=15), timedelta(seconds=900)).is_empty

    def test_int_and_float_compare_numerically(self) -> None:
        assert diff(_server(qps=5), _server(qps=5.0)).is_empty

    def test_frozen_containers_equal_mutable_ones(self) -> None:
        expected = {"labels": MappingProxyType({"a": "1"}), "args": ("x", "y")}
        actual = {"labels": {"a": "1"}, "args": ["x", "y"]}
        assert diff(expected, actual).is_empty


# =====================================================================
# Scalars
# =====================================================================


class TestScalarChanges:
    def test_single_port_change(self) -> None:
        report = diff(_server(port=10250), _server(port=8080))
        assert list(report) == [
            Discrepancy(FieldPath.of("port"), DiscrepancyKind.CHANGED, 10250, 8080),
        ]

    def test_duration_change_reports_both_durations(self) -> None:
        expected = _server(inner=_Inner(period=Duration.of(minutes=5)))
        actual = _server(inner=_Inner(period=Duration.of(minutes=10)))
        report = diff(expected, actual)
        assert len(report) == 1
        d = report[0]
        assert str(d.path) == "inner.period"
        assert d.kind == DiscrepancyKind.CHANGED
        assert d.expected == Duration.of(minutes=5)
        assert d.actual == Duration.of(minutes=10)

    def test_bool_is_not_a_number(self) -> None:
        report = diff({"v": 1}, {"v": True})
        assert [d.kind for d in report] == [DiscrepancyKind.SCHEMA_MISMATCH]

    def test_string_vs_int_is_schema_mismatch(self) -> None:
        report = diff({"port": 10250}, {"port": "10250"})
        assert report[0].kind == DiscrepancyKind.SCHEMA_MISMATCH
        assert str(report[0].path) == "['port']"

    def test_string_flag_provided_bit_is_compared(self) -> None:
        report = diff(_server(flag=StringFlag("x", False)), _server(flag=StringFlag("x", True)))
        assert report.paths() == ["flag.provided"]


# =====================================================================
# Optional fields
# =====================================================================


class TestOptionalFields:
    def test_both_absent_is_equal(self) -> None:
        assert diff(_Inner(oom_score_adj=None), _Inner(oom_score_adj=None)).is_empty

    def test_none_vs_zero_is_a_change(self) -> None:
        report = diff(_Inner(oom_score_adj=None), _Inner(oom_score_adj=0))
        assert list(report) == [
            Discrepancy(FieldPath.of("oom_score_adj"), DiscrepancyKind.CHANGED, None, 0),
        ]

    def test_value_vs_none_is_a_change(self) -> None:
        report = diff(_Inner(oom_score_adj=-999), _Inner(oom_score_adj=None))
        assert report[0].expected == -999
        assert report[0].actual is None

    def test_none_vs_record_is_a_change_not_a_crash(self) -> None:
        report = diff({"inner": None}, {"inner": _Inner()})
        assert [d.kind for d in report] == [DiscrepancyKind.CHANGED]


# =====================================================================
# Records and schema evolution
# =====================================================================


class TestRecords:
    def test_removed_and_added_fields(self) -> None:
        expected = _server()
        actual = _ServerV2(
            port=expected.port,
            qps=expected.qps,
            enabled=expected.enabled,
            flag=expected.flag,
            args=list(expected.args),
            inner=copy.deepcopy(expected.inner),
            bind_port=443,
        )
        report = diff(expected, actual)
        assert list(report) == [
            Discrepancy(FieldPath.of("address"), DiscrepancyKind.MISSING, "0.0.0.0", ABSENT),
            Discrepancy(FieldPath.of("bind_port"), DiscrepancyKind.ADDED, ABSENT, 443),
        ]

    def test_record_vs_mapping_is_schema_mismatch(self) -> None:
        report = diff({"inner": _Inner()}, {"inner": {"period": 0}})
        assert len(report) == 1
        assert report[0].kind == DiscrepancyKind.SCHEMA_MISMATCH
        assert str(report[0].path) == "['inner']"

    def test_fields_reported_in_declaration_order(self) -> None:
        expected = _server()
        actual = _server(port=1, address="127.0.0.1", enabled=False, qps=1.0)
        assert diff(expected, actual).paths() == ["port", "address", "qps", "enabled"]


# =====================================================================
# Mappings and sets
# =====================================================================


class TestMappings:
    def test_missing_added_and_changed_keys(self) -> None:
        expected = {"a": "1", "b": "2", "c": "3"}
        actual = {"b": "2", "c": "30", "d": "4"}
        report = diff(expected, actual)
        assert list(report) == [
            Discrepancy(FieldPath().key("a"), DiscrepancyKind.MISSING, "1", ABSENT),
            Discrepancy(FieldPath().key("c"), DiscrepancyKind.CHANGED, "3", "30"),
            Discrepancy(FieldPath().key("d"), DiscrepancyKind.ADDED, ABSENT, "4"),
        ]

    def test_insertion_order_does_not_matter(self) -> None:
        assert diff({"x": 1, "y": 2}, {"y": 2, "x": 1}).is_empty

    def test_nested_map_path(self) -> None:
        expected = _server()
        actual = _server(inner=_Inner(period=Duration.of(minutes=5), labels={"zone": "b", "role": "node"}, oom_score_adj=-999))
        assert diff(expected, actual).paths() == ["inner.labels['zone']"]

    def test_set_membership(self) -> None:
        report = diff({"caps": frozenset({"NET_ADMIN", "SYS_TIME"})}, {"caps": {"NET_ADMIN", "CHOWN"}})
        assert [(str(d.path), d.kind) for d in report] == [
            ("['caps']['CHOWN']", DiscrepancyKind.ADDED),
            ("['caps']['SYS_TIME']", DiscrepancyKind.MISSING),
        ]


# =====================================================================
# Sequences
# =====================================================================


class TestSequences:
    def test_positional_change(self) -> None:
        report = diff(["a", "b"], ["a", "c"])
        assert list(report) == [Discrepancy(FieldPath().index(1), DiscrepancyKind.CHANGED, "b", "c")]

    def test_length_difference_reported_at_sequence_path(self) -> None:
        report = diff(_server(args=["--v=2", "--logtostderr"]), _server(args=["--v=4"]))
        assert list(report) == [
            Discrepancy(FieldPath.of("args"), DiscrepancyKind.CHANGED, 2, 1, note="length"),
            Discrepancy(FieldPath.of("args").index(0), DiscrepancyKind.CHANGED, "--v=2", "--v=4"),
        ]

    def test_longer_actual_with_equal_prefix_reports_only_length(self) -> None:
        report = diff([1, 2], [1, 2, 3])
        assert len(report) == 1
        assert report[0].note == "length"
        assert (report[0].expected, report[0].actual) == (2, 3)


# =====================================================================
# Purity
# =====================================================================


class TestPurity:
    def test_inputs_not_mutated(self) -> None:
        expected = _server()
        actual = _server(port=1, args=["--v=9"])
        before = (copy.deepcopy(expected), copy.deepcopy(actual))
        diff(expected, actual)
        assert (expected, actual) == before

    def test_repeated_diff_is_identical(self) -> None:
        expected = {"m": {"b": 1, "a": 2, "c": [1, 2]}}
        actual = {"m": {"c": [1], "a": 3, "d": 4}}
        assert diff(expected, actual) == diff(expected, actual)
