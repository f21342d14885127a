"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ReportConfig:
    """Drift report rendering configuration."""

    format: str = "text"
    max_value_width: int = 120


@dataclass
class GuardConfig:
    """Which components the guard checks."""

    components: list[str] = field(default_factory=list)  # empty means all registered


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class KubeDriftConfig:
    """Top-level kubedrift configuration."""

    report: ReportConfig = field(default_factory=ReportConfig)
    guard: GuardConfig = field(default_factory=GuardConfig)
    log: LogConfig = field(default_factory=LogConfig)
