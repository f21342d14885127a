"""Error taxonomy for the drift guard.

KubeDriftError              -- base class.
DriftError                  -- upstream defaults differ from the snapshot;
                               carries the full diff report.
UpstreamConstructionFailure -- the upstream default constructor could not
                               produce a configuration. Never a drift condition.
UnknownComponentError       -- no default source registered for a component.
SnapshotMismatchError       -- a snapshot was checked against the wrong component.

Schema mismatches are not exceptions: they are reported as
``DiscrepancyKind.SCHEMA_MISMATCH`` entries inside a DriftError's report.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubedrift.models.policy import OverridePolicy
    from kubedrift.models.report import DiffReport


class KubeDriftError(Exception):
    """Base class for all kubedrift errors."""


class DriftError(KubeDriftError):
    """Raised when a component's upstream defaults drifted from its snapshot.

    A single-component error carries ``report``. An aggregate raised by
    ``DriftGuard.check_all`` carries the per-component errors in ``errors``;
    its ``report`` holds all of their discrepancies in check order, without
    the component each one belongs to.
    """

    def __init__(
        self,
        component: str,
        report: DiffReport,
        upstream_version: str | None = None,
        policy: OverridePolicy | None = None,
        errors: list[DriftError] | None = None,
    ) -> None:
        self.component = component
        self.report = report
        self.upstream_version = upstream_version
        self.policy = policy
        self.errors = errors or []
        super().__init__(self.render())

    def render(self, max_value_width: int = 120) -> str:
        from kubedrift.render import render

        if self.errors:
            return "\n\n".join(e.render(max_value_width) for e in self.errors)
        return render(
            self.report,
            component=self.component,
            policy=self.policy,
            upstream_version=self.upstream_version,
            max_value_width=max_value_width,
        )

    @property
    def components(self) -> list[str]:
        """Components with drift, in check order."""
        if self.errors:
            return [e.component for e in self.errors]
        return [self.component]


class UpstreamConstructionFailure(KubeDriftError):
    """The upstream default constructor failed to produce a configuration."""

    def __init__(self, component: str, reason: str) -> None:
        super().__init__(f"Upstream defaults for '{component}' could not be constructed: {reason}")
        self.component = component
        self.reason = reason


class UnknownComponentError(KubeDriftError, LookupError):
    """No default source is registered for the requested component."""

    def __init__(self, component: str) -> None:
        super().__init__(f"No default source registered for component '{component}'")
        self.component = component


class SnapshotMismatchError(KubeDriftError, ValueError):
    """A snapshot belongs to a different component than the one checked."""

    def __init__(self, component: str, snapshot_component: str) -> None:
        super().__init__(f"Snapshot for '{snapshot_component}' cannot be checked against '{component}'")
        self.component = component
        self.snapshot_component = snapshot_component
