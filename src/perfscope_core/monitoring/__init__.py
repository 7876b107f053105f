"""Performance monitoring module for Perfscope Core.

Exports:
    PerformanceMonitor: Owns monitoring state; render, memory, async and FPS entry points
    MonitorConfig: Thresholds and capacities
    ComponentMonitor: Accessor bound to one component label
    RenderRecord, MemorySnapshot, MemoryUsage: Recorded data
    RenderStats, PerformanceSummary: Aggregated data
    LifecycleEvent: Mount/unmount markers
    Success, Failure, capture, unwrap: Outcome of a measured operation
"""

from .async_wrapper import Failure, OperationTimer, Success, capture, unwrap
from .bounded_store import BoundedRecordStore
from .clock import monotonic_ms
from .component_monitor import ComponentMonitor
from .fps_sampler import FrameRateSampler, display_frames
from .memory_recorder import MemorySnapshotRecorder, psutil_memory_probe
from .models import (
    LifecycleEvent,
    MemorySnapshot,
    MemoryUsage,
    PerformanceSummary,
    RenderRecord,
    RenderStats,
)
from .performance_monitor import MonitorConfig, PerformanceMonitor
from .render_tracker import RenderTimingTracker
from .summary import aggregate_renders, summarize

__all__ = [
    "PerformanceMonitor",
    "MonitorConfig",
    "ComponentMonitor",
    "RenderTimingTracker",
    "MemorySnapshotRecorder",
    "OperationTimer",
    "FrameRateSampler",
    "BoundedRecordStore",
    "RenderRecord",
    "MemorySnapshot",
    "MemoryUsage",
    "RenderStats",
    "PerformanceSummary",
    "LifecycleEvent",
    "Success",
    "Failure",
    "capture",
    "unwrap",
    "aggregate_renders",
    "summarize",
    "display_frames",
    "monotonic_ms",
    "psutil_memory_probe",
]
