"""Drift guard: compares current upstream defaults against committed snapshots.

The guard is fail-closed. Any discrepancy raises DriftError with the full
report attached; there is no warning-only mode and no retry. Failures of the
upstream constructor itself propagate unmodified so they stay distinguishable
from drift.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from kubedrift.differ import diff
from kubedrift.errors import DriftError, SnapshotMismatchError
from kubedrift.models.policy import OverridePolicy
from kubedrift.models.report import DiffReport, DiscrepancyKind
from kubedrift.models.snapshot import Snapshot
from kubedrift.observability.logging import get_logger
from kubedrift.sources import DefaultSource, current_defaults, registered_sources

_logger = get_logger("guard")


class DriftGuard:
    """Checks components for default drift.

    Holds no state between calls: checking the same component twice against
    unchanged upstream code yields identical reports.
    """

    def __init__(
        self,
        defaults_for: Callable[[str], object] | None = None,
        sources: Mapping[str, DefaultSource] | None = None,
    ) -> None:
        if defaults_for is None:
            # a guard reads its own copy of the registry; later registrations
            # do not affect it
            registry = registered_sources() if sources is None else MappingProxyType(dict(sources))
            defaults_for = functools.partial(current_defaults, sources=registry)
        self._defaults_for = defaults_for

    def check(self, kind: str, snapshot: Snapshot | object) -> DiffReport:
        """Check *kind* against *snapshot* (a Snapshot or a bare expected tree).

        Returns the empty report on success; raises DriftError otherwise.
        """
        kind = str(kind)
        if isinstance(snapshot, Snapshot):
            if str(snapshot.component) != kind:
                raise SnapshotMismatchError(kind, str(snapshot.component))
            expected = snapshot.defaults
            version: str | None = snapshot.upstream_version
            policy: OverridePolicy | None = snapshot.policy
        else:
            expected, version, policy = snapshot, None, None

        _logger.debug("drift_check_started", target=kind, upstream_version=version)
        actual = self._defaults_for(kind)
        report = diff(expected, actual)

        if report.is_empty:
            _logger.info("drift_check_passed", target=kind, upstream_version=version)
            return report

        _logger.error(
            "drift_detected",
            target=kind,
            upstream_version=version,
            discrepancies=len(report),
            changed=report.count(DiscrepancyKind.CHANGED),
            missing=report.count(DiscrepancyKind.MISSING),
            added=report.count(DiscrepancyKind.ADDED),
            schema_mismatch=report.count(DiscrepancyKind.SCHEMA_MISMATCH),
            paths=report.paths()[:20],
        )
        raise DriftError(kind, report, upstream_version=version, policy=policy)

    def check_all(self, snapshots: Iterable[Snapshot]) -> dict[str, DiffReport]:
        """Check every snapshot's component, then raise once if any drifted.

        Every component is checked before failing so the report covers all of
        them. Upstream construction failures still propagate immediately.
        """
        results: dict[str, DiffReport] = {}
        failures: list[DriftError] = []
        for snapshot in snapshots:
            kind = str(snapshot.component)
            try:
                results[kind] = self.check(kind, snapshot)
            except DriftError as exc:
                failures.append(exc)
                results[kind] = exc.report

        if len(failures) == 1:
            raise failures[0]
        if failures:
            raise DriftError(
                ", ".join(f.component for f in failures),
                DiffReport(tuple(d for f in failures for d in f.report)),
                errors=failures,
            )
        return results


def check(kind: str, snapshot: Snapshot | object) -> DiffReport:
    """Module-level shortcut for ``DriftGuard().check``."""
    return DriftGuard().check(kind, snapshot)
