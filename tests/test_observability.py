"""Tests for structured logging helpers."""

import pytest
import structlog
from structlog.testing import capture_logs

from piishield.observability import (
    LoggingConfig,
    ObservabilityConfig,
    configure_logging,
    correlation_context,
    get_logger,
    set_config,
    trace_operation,
)
from piishield.observability.logging import add_correlation_id, correlation_id


@pytest.fixture(autouse=True)
def reset_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestCorrelation:
    """Test correlation id propagation."""

    def test_context_sets_and_restores(self):
        assert correlation_id.get() == ""
        with correlation_context("req-1") as corr_id:
            assert corr_id == "req-1"
            assert correlation_id.get() == "req-1"
        assert correlation_id.get() == ""

    def test_generated_id(self):
        with correlation_context() as corr_id:
            assert len(corr_id) == 36

    def test_processor_adds_id(self):
        with correlation_context("req-2"):
            event = add_correlation_id(None, "info", {"event": "x"})
        assert event["correlation_id"] == "req-2"

    def test_processor_without_id(self):
        assert "correlation_id" not in add_correlation_id(None, "info", {"event": "x"})


class TestTraceOperation:
    """Test operation tracing."""

    def test_success_logged_with_attributes(self):
        with capture_logs() as logs:
            with trace_operation("export_record", table_name="profiles") as attributes:
                attributes["fields_masked"] = 2

        completed = [e for e in logs if e["event"] == "Operation completed"]
        assert len(completed) == 1
        assert completed[0]["operation"] == "export_record"
        assert completed[0]["table_name"] == "profiles"
        assert completed[0]["fields_masked"] == 2
        assert completed[0]["status"] == "success"

    def test_failure_logged_and_reraised(self):
        with capture_logs() as logs:
            with pytest.raises(ValueError):
                with trace_operation("delete_record"):
                    raise ValueError("boom")

        failed = [e for e in logs if e["event"] == "Operation failed"]
        assert len(failed) == 1
        assert failed[0]["error_type"] == "ValueError"
        assert failed[0]["log_level"] == "error"

    def test_tracing_disabled(self):
        set_config(ObservabilityConfig(logging=LoggingConfig(enable_tracing=False)))

        with capture_logs() as logs:
            with trace_operation("export_record", table_name="t") as attributes:
                assert attributes == {"table_name": "t"}

        assert logs == []

    def test_unconfigured_structlog_writes_nothing(self, capsys):
        assert not structlog.is_configured()

        with trace_operation("export_record", table_name="t") as attributes:
            attributes["fields_masked"] = 1
        with pytest.raises(ValueError):
            with trace_operation("delete_record"):
                raise ValueError("boom")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestConfigureLogging:
    """Test logging setup."""

    def test_json_configuration(self):
        configure_logging(LoggingConfig(level="DEBUG", format="json"))
        assert structlog.is_configured()
        assert get_logger("piishield.test") is not None

    def test_text_configuration(self):
        configure_logging(LoggingConfig(format="text"))
        assert structlog.is_configured()
