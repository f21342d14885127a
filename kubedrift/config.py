"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kubedrift.models.config import GuardConfig, KubeDriftConfig, LogConfig, ReportConfig
from kubedrift.models.snapshot import ComponentKind
from kubedrift.observability.logging import LOG_FORMATS


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEDRIFT_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_list(key: str) -> list[str]:
    return [item.strip() for item in _env(key).split(",") if item.strip()]


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    if value.lower() not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {value}. Must be one of {set(LOG_FORMATS)}")
    return value.lower()


def _validate_report_format(value: str) -> str:
    valid = {"text", "json"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid report format: {value}. Must be one of {valid}")
    return value.lower()


def _validate_components(values: list[str]) -> list[str]:
    known = {k.value for k in ComponentKind}
    for value in values:
        if value not in known:
            raise ValueError(f"Unknown component: {value}. Must be one of {sorted(known)}")
    return values


def load_config() -> KubeDriftConfig:
    """Load configuration from KUBEDRIFT_* environment variables."""
    return KubeDriftConfig(
        report=ReportConfig(
            format=_validate_report_format(_env("REPORT_FORMAT", "text")),
            max_value_width=_env_int("MAX_VALUE_WIDTH", 120, min_val=20, max_val=1000),
        ),
        guard=GuardConfig(
            components=_validate_components(_env_list("COMPONENTS")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
