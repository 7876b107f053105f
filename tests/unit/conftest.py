"""
Unit test fixtures.

Isolates unit tests from environment variables (.env file) and provides
deterministic host capabilities for the monitor.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import os
from unittest.mock import Mock

import pytest

from perfscope_core.monitoring import MemoryUsage

# Environment variables that affect PerfscopeSettings defaults
CONFIG_ENV_VARS = [
    "ENVIRONMENT",
    "DEBUG_LOGGING",
    "SLOW_RENDER_THRESHOLD_MS",
    "SLOW_OPERATION_THRESHOLD_MS",
    "MAX_RENDER_RECORDS",
    "MAX_MEMORY_SNAPSHOTS",
    "SUMMARY_SNAPSHOT_COUNT",
    "LOW_FPS_THRESHOLD",
    "FPS_SAMPLE_INTERVAL_MS",
    "DISPLAY_REFRESH_HZ",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env_for_unit_tests(monkeypatch, tmp_path):
    """
    Remove config-related environment variables and run from a temp directory
    so no .env file is picked up.
    """
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    original_dir = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_dir)


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock(start=1000.0)


@pytest.fixture
def logger():
    """Diagnostic sink that records info/warning/error calls."""
    return Mock()


@pytest.fixture
def memory_probe():
    """Probe reporting 10MB used / 20MB total / 100MB limit."""
    return Mock(
        return_value=MemoryUsage(
            used_bytes=10 * 1024 * 1024,
            total_bytes=20 * 1024 * 1024,
            limit_bytes=100 * 1024 * 1024,
        )
    )
