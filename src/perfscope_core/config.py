"""
Configuration Management for Perfscope.

Provides centralized, type-safe configuration loading using Pydantic Settings.
Supports environment variables, .env files, and sensible defaults for zero-config operation.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Per-environment default for debug logging when DEBUG_LOGGING is not set
ENVIRONMENT_DEBUG_DEFAULTS: Dict[str, bool] = {
    "development": True,
    "staging": True,
    "production": False,
}


class PerfscopeSettings(BaseSettings):
    """
    Centralized configuration manager for the performance monitor.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables
    2. .env file in project root
    3. Hardcoded default values

    Monitoring is switched on only for debug-logging development builds;
    every other combination turns the monitor into a no-op.

    Example:
        ```python
        from perfscope_core.config import settings

        if settings.monitoring_enabled:
            print(settings.slow_render_threshold_ms)  # 16.0
        ```
    """

    # ========================================
    # ENVIRONMENT
    # ========================================

    environment: str = Field(
        default="development",
        description="Build environment (development, staging, production)",
    )

    debug_logging: Optional[bool] = Field(
        default=None,
        description="Enable debug diagnostics (None = per-environment default)",
    )

    # ========================================
    # RENDER TIMING
    # ========================================

    slow_render_threshold_ms: float = Field(
        default=16.0,
        ge=0.0,
        le=10_000.0,
        description="Render duration above which a slow render is reported (one 60Hz frame)",
    )

    max_render_records: int = Field(
        default=1000, ge=1, le=1_000_000, description="Maximum retained render records"
    )

    # ========================================
    # MEMORY SNAPSHOTS
    # ========================================

    max_memory_snapshots: int = Field(
        default=100, ge=1, le=100_000, description="Maximum retained memory snapshots"
    )

    summary_snapshot_count: int = Field(
        default=10, ge=0, le=100_000, description="Snapshots included in a summary"
    )

    # ========================================
    # ASYNC OPERATIONS
    # ========================================

    slow_operation_threshold_ms: float = Field(
        default=1000.0,
        ge=0.0,
        le=3_600_000.0,
        description="Async operation duration above which a slow operation is reported",
    )

    # ========================================
    # FRAME RATE
    # ========================================

    low_fps_threshold: int = Field(
        default=50, ge=0, le=1000, description="FPS below which a low frame rate is reported"
    )

    fps_sample_interval_ms: float = Field(
        default=1000.0, gt=0.0, le=60_000.0, description="FPS measurement window in ms"
    )

    display_refresh_hz: float = Field(
        default=60.0, gt=0.0, le=1000.0, description="Refresh rate of the default frame source"
    )

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(default="json", description="Log format (json, console)")

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """
        Validate environment is one of the known build environments.

        Args:
            v: Environment name (case-insensitive)

        Returns:
            Lowercase environment name

        Raises:
            ValueError: If environment is unknown
        """
        allowed = list(ENVIRONMENT_DEBUG_DEFAULTS)
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got '{v}'")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Args:
            v: Log level string (case-insensitive)

        Returns:
            Uppercase log level string

        Raises:
            ValueError: If log level not in allowed values
        """
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """
        Validate log format is one of allowed values.

        Args:
            v: Log format string (case-insensitive)

        Returns:
            Lowercase log format string

        Raises:
            ValueError: If log format not in allowed values
        """
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    # ========================================
    # COMPUTED PROPERTIES
    # ========================================

    @property
    def debug_logging_enabled(self) -> bool:
        """
        Effective debug logging flag.

        Returns:
            Explicit DEBUG_LOGGING value, or the environment default when unset
        """
        if self.debug_logging is not None:
            return self.debug_logging
        return ENVIRONMENT_DEBUG_DEFAULTS[self.environment]

    @property
    def is_development_build(self) -> bool:
        """True if running a development build."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """True if running a production build."""
        return self.environment == "production"

    @property
    def monitoring_enabled(self) -> bool:
        """
        Whether the performance monitor should record anything.

        Returns:
            True only when debug logging is on AND this is a development build
        """
        return self.debug_logging_enabled and self.is_development_build

    # ========================================
    # PYDANTIC CONFIGURATION
    # ========================================

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,  # Validate on attribute assignment
        "extra": "forbid",  # Forbid extra fields (strict mode)
    }


# ============================================================
# HELPER FUNCTIONS
# ============================================================


def get_config_summary(settings: PerfscopeSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging.

    Args:
        settings: PerfscopeSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "environment": {
            "name": settings.environment,
            "debug_logging": settings.debug_logging_enabled,
            "monitoring_enabled": settings.monitoring_enabled,
        },
        "render": {
            "slow_render_threshold_ms": settings.slow_render_threshold_ms,
            "max_render_records": settings.max_render_records,
        },
        "memory": {
            "max_memory_snapshots": settings.max_memory_snapshots,
            "summary_snapshot_count": settings.summary_snapshot_count,
        },
        "operations": {
            "slow_operation_threshold_ms": settings.slow_operation_threshold_ms,
        },
        "fps": {
            "low_fps_threshold": settings.low_fps_threshold,
            "fps_sample_interval_ms": settings.fps_sample_interval_ms,
            "display_refresh_hz": settings.display_refresh_hz,
        },
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
    }


# Singleton instance - instantiated once at module import
settings = PerfscopeSettings()
