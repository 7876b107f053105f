"""Performance monitor for UI render cycles, memory and async operations.

Times component renders, samples process memory, wraps async operations with
duration/error tracking and aggregates everything into a bounded, queryable
summary. Designed to be cheap enough to run on every render in a debug build
and a complete no-op when disabled.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import asyncio
import functools
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterator,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

import structlog

from perfscope_core.config import PerfscopeSettings
from perfscope_core.config import settings as default_settings
from perfscope_core.exceptions import ConfigurationError

from .async_wrapper import OperationTimer
from .bounded_store import BoundedRecordStore
from .clock import Clock, monotonic_ms
from .component_monitor import ComponentMonitor
from .fps_sampler import FrameRateSampler, FrameSource, display_frames
from .memory_recorder import MemoryProbe, MemorySnapshotRecorder, psutil_memory_probe
from .models import LifecycleEvent, MemorySnapshot, PerformanceSummary, RenderRecord
from .render_tracker import RenderTimingTracker
from .summary import summarize

T = TypeVar("T")


@dataclass(frozen=True)
class MonitorConfig:
    """
    Thresholds and capacities for PerformanceMonitor.

    Attributes:
        slow_render_threshold_ms: Renders longer than this are reported (default: 16)
        slow_operation_threshold_ms: Async operations longer than this are reported (default: 1000)
        max_render_records: Render records retained before FIFO eviction (default: 1000)
        max_memory_snapshots: Snapshots retained before FIFO eviction (default: 100)
        summary_snapshot_count: Newest snapshots included in a summary (default: 10)
        low_fps_threshold: FPS below this is reported (default: 50)
        fps_sample_interval_ms: FPS measurement window (default: 1000)
        display_refresh_hz: Tick rate of the default frame source (default: 60)
    """

    slow_render_threshold_ms: float = 16.0
    slow_operation_threshold_ms: float = 1000.0
    max_render_records: int = 1000
    max_memory_snapshots: int = 100
    summary_snapshot_count: int = 10
    low_fps_threshold: int = 50
    fps_sample_interval_ms: float = 1000.0
    display_refresh_hz: float = 60.0

    def __post_init__(self) -> None:
        if self.max_render_records < 1:
            raise ConfigurationError(
                f"max_render_records must be >= 1, got {self.max_render_records}"
            )
        if self.max_memory_snapshots < 1:
            raise ConfigurationError(
                f"max_memory_snapshots must be >= 1, got {self.max_memory_snapshots}"
            )
        if self.summary_snapshot_count < 0:
            raise ConfigurationError(
                f"summary_snapshot_count must be >= 0, got {self.summary_snapshot_count}"
            )
        for name in (
            "slow_render_threshold_ms",
            "slow_operation_threshold_ms",
            "low_fps_threshold",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")
        if self.fps_sample_interval_ms <= 0:
            raise ConfigurationError(
                f"fps_sample_interval_ms must be > 0, got {self.fps_sample_interval_ms}"
            )
        if self.display_refresh_hz <= 0:
            raise ConfigurationError(
                f"display_refresh_hz must be > 0, got {self.display_refresh_hz}"
            )

    @classmethod
    def from_settings(cls, settings: PerfscopeSettings) -> "MonitorConfig":
        """Copy thresholds and capacities from application settings."""
        return cls(
            slow_render_threshold_ms=settings.slow_render_threshold_ms,
            slow_operation_threshold_ms=settings.slow_operation_threshold_ms,
            max_render_records=settings.max_render_records,
            max_memory_snapshots=settings.max_memory_snapshots,
            summary_snapshot_count=settings.summary_snapshot_count,
            low_fps_threshold=settings.low_fps_threshold,
            fps_sample_interval_ms=settings.fps_sample_interval_ms,
            display_refresh_hz=settings.display_refresh_hz,
        )


class PerformanceMonitor:
    """
    Owns all monitoring state behind a single enable flag.

    The monitor holds two bounded collections (render records and memory
    snapshots) and hands them to the components that fill them. The enable
    flag is fixed at construction. When it is False every operation returns
    immediately with the same return type it would have when enabled:
    start_render() gives None, get_summary() gives None and measure_async()
    simply awaits the operation.

    Create one instance at startup and pass it to whatever needs it;
    clear() is the only mid-life reset.

    Thread-safe: No (designed for single-threaded asyncio usage)

    Attributes:
        _render_records: Ordered store of render records (FIFO eviction)
        _memory_snapshots: Circular buffer of snapshots
        _config: Thresholds and capacities

    Example:
        ```python
        monitor = PerformanceMonitor.from_settings(settings)

        token = monitor.start_render("ProfileScreen")
        draw_profile()
        monitor.end_render(token)

        profile = await monitor.measure_async("load_profile", lambda: api.profile(42))

        summary = monitor.get_summary()
        if summary:
            print(summary.render_summary["ProfileScreen"].avg_time)
        ```
    """

    def __init__(
        self,
        enabled: bool = False,
        config: Optional[MonitorConfig] = None,
        *,
        clock: Clock = monotonic_ms,
        memory_probe: Optional[MemoryProbe] = psutil_memory_probe,
        frame_source: Optional[FrameSource] = None,
        logger: Any = None,
    ) -> None:
        """
        Initialize PerformanceMonitor.

        Args:
            enabled: Record anything at all. Fixed for the monitor's lifetime.
                Off by default; from_settings() derives it from configuration.
            config: Thresholds and capacities (default: MonitorConfig())
            clock: Monotonic millisecond clock
            memory_probe: Memory usage reader; None means the host has none
            frame_source: Per-frame async iterator factory
                (default: display_frames(config.display_refresh_hz))
            logger: Diagnostic sink with info/warning/error methods
                (default: structlog logger bound to this component)
        """
        self._enabled = bool(enabled)
        self._config = config or MonitorConfig()
        self._logger = (
            logger
            if logger is not None
            else structlog.get_logger(__name__).bind(component="PerformanceMonitor")
        )

        self._render_records: BoundedRecordStore[str, RenderRecord] = BoundedRecordStore(
            self._config.max_render_records
        )
        self._memory_snapshots: deque[MemorySnapshot] = deque(
            maxlen=self._config.max_memory_snapshots
        )

        self._renders = RenderTimingTracker(
            self._render_records,
            self._enabled,
            clock,
            self._logger,
            slow_render_threshold_ms=self._config.slow_render_threshold_ms,
        )
        self._memory = MemorySnapshotRecorder(
            self._memory_snapshots, self._enabled, memory_probe, self._logger
        )
        self._operations = OperationTimer(
            self._enabled,
            clock,
            self._logger,
            slow_operation_threshold_ms=self._config.slow_operation_threshold_ms,
        )
        self._fps = FrameRateSampler(
            self._enabled,
            clock,
            self._logger,
            frame_source or display_frames(self._config.display_refresh_hz),
            low_fps_threshold=self._config.low_fps_threshold,
            sample_interval_ms=self._config.fps_sample_interval_ms,
        )

        if self._enabled:
            self._logger.info(
                "performance_monitor_initialized",
                max_render_records=self._config.max_render_records,
                max_memory_snapshots=self._config.max_memory_snapshots,
            )

    @classmethod
    def from_settings(
        cls, settings: Optional[PerfscopeSettings] = None, **kwargs: Any
    ) -> "PerformanceMonitor":
        """
        Build a monitor from application settings.

        Args:
            settings: PerfscopeSettings (default: module-level settings)
            **kwargs: Host capabilities forwarded to __init__ (clock, memory_probe, ...)

        Returns:
            Monitor enabled only for debug-logging development builds
        """
        if settings is None:
            settings = default_settings

        return cls(
            enabled=settings.monitoring_enabled,
            config=MonitorConfig.from_settings(settings),
            **kwargs,
        )

    # ========================================
    # STATE
    # ========================================

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def config(self) -> MonitorConfig:
        return self._config

    @property
    def render_records(self) -> Tuple[RenderRecord, ...]:
        """Copies of the retained render records, oldest first."""
        return tuple(replace(record) for record in self._render_records.values())

    @property
    def memory_snapshots(self) -> Tuple[MemorySnapshot, ...]:
        """Retained memory snapshots, oldest first."""
        return tuple(self._memory_snapshots)

    # ========================================
    # RENDER TIMING
    # ========================================

    def start_render(self, label: str) -> Optional[str]:
        """Open a render record for label; returns its token (None when disabled)."""
        return self._renders.start(label)

    def end_render(self, token: Optional[str]) -> None:
        """Close the render record for token. Unknown or repeated tokens are ignored."""
        self._renders.end(token)

    @contextmanager
    def track_render(self, label: str) -> Iterator[Optional[str]]:
        """
        Time the body of a with-block as one render of label.

        The record is closed even if the body raises; the exception propagates.
        """
        token = self.start_render(label)
        try:
            yield token
        finally:
            self.end_render(token)

    # ========================================
    # MEMORY
    # ========================================

    def take_memory_snapshot(self, label: str = "default") -> Optional[MemorySnapshot]:
        return self._memory.take_snapshot(label)

    def log_component_lifecycle(
        self,
        label: str,
        event: Union[LifecycleEvent, str],
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._memory.log_lifecycle_event(label, event, extra)

    # ========================================
    # ASYNC OPERATIONS
    # ========================================

    async def measure_async(
        self, operation_name: str, operation: Callable[[], Awaitable[T]]
    ) -> T:
        """
        Await operation, logging its duration; results and errors pass through unchanged.

        Args:
            operation_name: Name used in diagnostics
            operation: Zero-argument callable returning an awaitable

        Returns:
            The operation's result
        """
        return await self._operations.measure(operation_name, operation)

    def measured(
        self, name: Optional[str] = None
    ) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
        """
        Decorator routing every call of an async function through measure_async.

        Args:
            name: Operation name (default: the function's __qualname__)

        Example:
            ```python
            @monitor.measured("fetch_feed")
            async def fetch_feed(page: int) -> list: ...
            ```
        """

        def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
            operation_name = name or func.__qualname__

            @functools.wraps(func)
            async def wrapper(*args: Any, **kwargs: Any) -> T:
                return await self.measure_async(operation_name, lambda: func(*args, **kwargs))

            return wrapper

        return decorator

    # ========================================
    # FRAME RATE
    # ========================================

    def start_fps_logging(self) -> Optional[asyncio.Task]:
        """
        Start sampling frame rate in the background.

        Returns:
            Cancellable task handle, or None when disabled or outside an event loop
        """
        return self._fps.start()

    def stop_fps_logging(self) -> None:
        self._fps.stop()

    @property
    def last_fps(self) -> Optional[int]:
        """Most recent FPS measurement, None until one window has elapsed."""
        return self._fps.last_fps

    # ========================================
    # SUMMARY
    # ========================================

    def get_summary(self) -> Optional[PerformanceSummary]:
        """
        Aggregate closed render records and recent snapshots.

        Pure read: no state changes, no diagnostics.

        Returns:
            PerformanceSummary, or None when disabled
        """
        if not self._enabled:
            return None

        return summarize(
            self._render_records.values(),
            self._memory_snapshots,
            snapshot_count=self._config.summary_snapshot_count,
        )

    def clear(self) -> None:
        """Drop all render records and snapshots. Works whether or not monitoring is enabled."""
        self._render_records.clear()
        self._memory_snapshots.clear()

        if self._enabled:
            self._logger.info("performance_data_cleared")

    def for_component(self, label: str) -> ComponentMonitor:
        """Return an accessor bound to label."""
        return ComponentMonitor(self, label)
