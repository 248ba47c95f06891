import logging
from unittest.mock import patch

import pytest

from infrastructure.logging import get_log_level, setup_logger
from infrastructure.telemetry import setup_opentelemetry


class TestLogging:
    """Test logging configuration from the environment."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("bogus", logging.INFO),
        ],
    )
    def test_get_log_level(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: int
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", value)
        assert get_log_level() == expected

    @pytest.mark.unit
    def test_get_log_level_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level() == logging.INFO

    @pytest.mark.unit
    def test_setup_logger_installs_coloredlogs(self) -> None:
        with patch("infrastructure.logging.coloredlogs.install") as install:
            setup_logger(logging.DEBUG)

        install.assert_called_once()
        assert install.call_args.kwargs["level"] == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING


class TestTelemetry:
    """Test OpenTelemetry setup switches."""

    @pytest.mark.unit
    def test_disabled_by_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OTEL_TRACES_ENABLED", "false")
        assert setup_opentelemetry() is False

    @pytest.mark.unit
    def test_exporter_failure_is_not_fatal(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OTEL_TRACES_ENABLED", "true")
        with patch(
            "infrastructure.telemetry.OTLPSpanExporter",
            side_effect=RuntimeError("no exporter"),
        ):
            assert setup_opentelemetry() is False
