"""
Logger Factory - Convenience wrapper for LoggingService.

Provides simple get_logger() / configure_logging() functions so that
application code does not need to import LoggingService directly.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Optional

import structlog

from perfscope_core.config import settings
from perfscope_core.logging_service import LoggingService


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a module/component-specific logger.

    Args:
        name: Logger name (typically module path or __name__)

    Returns:
        BoundLogger instance

    Raises:
        RuntimeError: If logging not configured yet (call configure_logging() first)
        ValueError: If name is empty or exceeds maximum length (200 chars)
    """
    return LoggingService.get_logger(name)


def configure_logging(level: Optional[str] = None, format: Optional[str] = None) -> None:
    """
    Configure structured logging infrastructure.

    Uses settings.log_level / settings.log_format for any argument left as None.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" or "console")

    Raises:
        ValueError: If level or format is invalid
        RuntimeError: If called after logging already configured

    Example:
        ```python
        from perfscope_core.utils import configure_logging, get_logger

        configure_logging(format="console")
        logger = get_logger(__name__)
        ```
    """
    if level is None:
        level = settings.log_level
    if format is None:
        format = settings.log_format

    LoggingService.configure_logging(level=level, format=format)
