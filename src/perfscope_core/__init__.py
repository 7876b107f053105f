"""
Perfscope Core.

In-process performance instrumentation for debug builds. Contains:
- Performance monitor (render timing, memory snapshots, async timing, FPS)
- Exception hierarchy
- Configuration management
- Logging service

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from .config import (
    PerfscopeSettings,
    get_config_summary,
    settings,
)
from .exceptions import (
    ConfigurationError,
    PerfscopeError,
)
from .logging_service import (
    LoggingConfig,
    LoggingService,
)
from .monitoring import (
    ComponentMonitor,
    LifecycleEvent,
    MonitorConfig,
    PerformanceMonitor,
    PerformanceSummary,
)

__all__ = [
    # Exceptions
    "PerfscopeError",
    "ConfigurationError",
    # Configuration
    "PerfscopeSettings",
    "settings",
    "get_config_summary",
    # Logging
    "LoggingService",
    "LoggingConfig",
    # Monitoring
    "PerformanceMonitor",
    "MonitorConfig",
    "ComponentMonitor",
    "LifecycleEvent",
    "PerformanceSummary",
]
