"""Tests for environment-variable configuration loading."""

from __future__ import annotations

import pytest
import structlog

from kubedrift.config import load_config
from kubedrift.observability.logging import setup_logging


class TestLoadConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("LOG_LEVEL", "LOG_FORMAT", "REPORT_FORMAT", "MAX_VALUE_WIDTH", "COMPONENTS"):
            monkeypatch.delenv(f"KUBEDRIFT_{key}", raising=False)
        config = load_config()
        assert config.log.level == "info"
        assert config.log.format == "json"
        assert config.report.format == "text"
        assert config.report.max_value_width == 120
        assert config.guard.components == []

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEDRIFT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("KUBEDRIFT_LOG_FORMAT", "console")
        monkeypatch.setenv("KUBEDRIFT_REPORT_FORMAT", "json")
        monkeypatch.setenv("KUBEDRIFT_COMPONENTS", "kube-proxy, kubelet")
        config = load_config()
        assert config.log.level == "debug"
        assert config.log.format == "console"
        assert config.report.format == "json"
        assert config.guard.components == ["kube-proxy", "kubelet"]

    @pytest.mark.parametrize(("raw", "expected"), [("5", 20), ("5000", 1000), ("64", 64)])
    def test_value_width_clamped(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
        monkeypatch.setenv("KUBEDRIFT_MAX_VALUE_WIDTH", raw)
        assert load_config().report.max_value_width == expected

    @pytest.mark.parametrize(
        ("key", "value", "message"),
        [
            ("LOG_LEVEL", "verbose", "Invalid log level"),
            ("LOG_FORMAT", "xml", "Invalid log format"),
            ("REPORT_FORMAT", "yaml", "Invalid report format"),
            ("COMPONENTS", "kubelet,kube-scheduler", "Unknown component"),
        ],
    )
    def test_invalid_values(self, monkeypatch: pytest.MonkeyPatch, key: str, value: str, message: str) -> None:
        monkeypatch.setenv(f"KUBEDRIFT_{key}", value)
        with pytest.raises(ValueError, match=message):
            load_config()


class TestSetupLogging:
    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_events_go_to_stderr(self, capsys: pytest.CaptureFixture[str], fmt: str) -> None:
        setup_logging("info", fmt)
        structlog.get_logger(component="test").info("drift_check_passed", target="kubelet")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "drift_check_passed" in captured.err

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("warning")
        structlog.get_logger(component="test").info("drift_check_started")
        assert capsys.readouterr().err == ""
