"""Shared fixtures for kubedrift integration tests.

Integration tests run the guard against the committed snapshots and the
vendored upstream constructors, the same way the build gate does.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator

import pytest

from kubedrift.models.snapshot import ComponentKind
from kubedrift.sources import DefaultSource, get_source, register_source


def replace_upstream(kind: ComponentKind, factory: Callable[[], object]) -> None:
    """Point *kind* at a different upstream constructor."""
    register_source(dataclasses.replace(get_source(kind), factory=factory), replace=True)


@pytest.fixture
def restore_sources() -> Iterator[None]:
    """Restore the built-in default sources after a test swaps them."""
    saved: dict[ComponentKind, DefaultSource] = {kind: get_source(kind) for kind in ComponentKind}
    yield
    for source in saved.values():
        register_source(source, replace=True)


@pytest.fixture(autouse=True)
def _no_log_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from reconfiguring structlog onto CliRunner's streams."""
    monkeypatch.setattr("kubedrift.cli.main.setup_logging", lambda level, fmt="json": None)
