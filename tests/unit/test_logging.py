"""
Unit tests for LoggingService and the logger factory.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import json
from io import StringIO

import pytest
import structlog

from perfscope_core.config import settings
from perfscope_core.logging_service import LoggingConfig, LoggingService
from perfscope_core.monitoring import PerformanceMonitor
from perfscope_core.utils import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_structlog():
    yield
    structlog.reset_defaults()


# ============================================================
# CONFIGURATION TESTS
# ============================================================


def test_configure_logging_success():
    LoggingService.configure_logging(level="INFO", format="json")

    assert LoggingService._configured is True
    assert LoggingService._log_level == "INFO"
    assert LoggingService._config is not None


def test_configure_logging_with_config_object():
    config = LoggingConfig(level="DEBUG", format="console", sensitive_keys={"pin"})

    LoggingService.configure_logging(config=config)

    assert LoggingService._log_level == "DEBUG"
    assert LoggingService._sensitive_keys == {"pin"}


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        LoggingService.configure_logging(level="INVALID")

    assert LoggingService._configured is False


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid format"):
        LoggingService.configure_logging(format="xml")


def test_configure_logging_already_configured():
    LoggingService.configure_logging(level="INFO")

    with pytest.raises(RuntimeError, match="already configured"):
        LoggingService.configure_logging(level="DEBUG")


# ============================================================
# LOGGER TESTS
# ============================================================


def test_get_logger_requires_configuration():
    with pytest.raises(RuntimeError, match="not configured"):
        LoggingService.get_logger("perfscope")


def test_get_logger_cached():
    LoggingService.configure_logging()

    assert LoggingService.get_logger("perfscope") is LoggingService.get_logger("perfscope")


def test_get_logger_invalid_names():
    LoggingService.configure_logging()

    with pytest.raises(ValueError, match="cannot be empty"):
        LoggingService.get_logger("")
    with pytest.raises(ValueError, match="maximum length"):
        LoggingService.get_logger("x" * 201)


def test_factory_configures_from_settings():
    configure_logging()

    assert LoggingService._configured is True
    assert LoggingService._log_level == settings.log_level
    assert LoggingService._config.format == settings.log_format
    assert get_logger("perfscope.app") is LoggingService.get_logger("perfscope.app")


def test_monitor_diagnostics_rendered_as_json():
    stream = StringIO()
    LoggingService.configure_logging(config=LoggingConfig(level="DEBUG", output_stream=stream))

    ticks = iter([0.0, 40.0])
    monitor = PerformanceMonitor(enabled=True, clock=lambda: next(ticks), memory_probe=None)
    token = monitor.start_render("Gallery")
    monitor.end_render(token)

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    slow = [line for line in lines if line["event"] == "slow_render_detected"]
    assert len(slow) == 1
    assert slow[0]["level"] == "warning"
    assert slow[0]["label"] == "Gallery"
    assert slow[0]["duration_ms"] == 40.0
    assert slow[0]["component"] == "PerformanceMonitor"


def test_level_filtering():
    stream = StringIO()
    LoggingService.configure_logging(config=LoggingConfig(level="WARNING", output_stream=stream))

    ticks = iter([0.0, 1.0])
    monitor = PerformanceMonitor(enabled=True, clock=lambda: next(ticks), memory_probe=None)
    monitor.end_render(monitor.start_render("Fast"))

    assert stream.getvalue() == ""


# ============================================================
# SANITIZATION TESTS
# ============================================================


def test_sanitize_uses_default_keys_when_unconfigured():
    data = {"token": "abc", "user": "alice"}

    assert LoggingService.sanitize_metadata(data) == {"token": "[REDACTED]", "user": "alice"}


def test_sanitize_nested_structures():
    LoggingService.configure_logging(config=LoggingConfig(sensitive_keys={"secret"}))

    data = {
        "outer": {"Secret": "x", "ok": 1},
        "items": [{"secret": "y"}, "plain"],
        "password": "not-in-custom-set",
    }

    assert LoggingService.sanitize_metadata(data) == {
        "outer": {"Secret": "[REDACTED]", "ok": 1},
        "items": [{"secret": "[REDACTED]"}, "plain"],
        "password": "not-in-custom-set",
    }


def test_sanitize_non_dict_returned_unchanged():
    assert LoggingService.sanitize_metadata("text") == "text"
