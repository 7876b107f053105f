"""
Pytest configuration and fixtures for all tests.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import pytest

from perfscope_core.logging_service import LoggingService


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Reset LoggingService state before and after each test."""
    LoggingService._configured = False
    LoggingService._log_level = "INFO"
    LoggingService._config = None
    LoggingService._loggers = {}
    LoggingService._sensitive_keys = set()

    yield

    LoggingService._configured = False
    LoggingService._loggers = {}
    LoggingService._sensitive_keys = set()
