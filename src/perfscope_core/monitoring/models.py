"""
Data models for the performance monitor.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

BYTES_PER_MB = 1024 * 1024


def format_megabytes(num_bytes: int) -> str:
    """Render a byte count as megabytes with two decimals, e.g. ``"12.50MB"``."""
    return f"{num_bytes / BYTES_PER_MB:.2f}MB"


class LifecycleEvent(str, Enum):
    """
    Component lifecycle markers that trigger an implicit memory snapshot.

    Any other event string is logged but takes no snapshot.
    """

    MOUNT = "mount"
    UNMOUNT = "unmount"


@dataclass
class RenderRecord:
    """
    One timed render attempt.

    A record is open (end_time is None) from start_render until the single
    matching end_render call.

    Attributes:
        label: Caller-supplied name, usually a component identifier
        start_time: Clock reading (ms) at start_render
        end_time: Clock reading (ms) at end_render, None while open
        duration: end_time - start_time, None while open
    """

    label: str
    start_time: float
    end_time: Optional[float] = None
    duration: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def close(self, end_time: float) -> float:
        """
        Stamp the end time and return the computed duration.

        A closed record keeps its first end time; later calls return the
        stored duration unchanged.
        """
        if self.duration is not None:
            return self.duration
        self.end_time = end_time
        self.duration = end_time - self.start_time
        return self.duration


@dataclass(frozen=True)
class MemoryUsage:
    """Raw heap usage reading returned by a memory probe."""

    used_bytes: int
    total_bytes: int
    limit_bytes: int


@dataclass(frozen=True)
class MemorySnapshot:
    """
    Point-in-time memory usage sample. Never mutated after creation.

    Attributes:
        label: Snapshot label (e.g. "default", "Checkout_mount")
        timestamp: Unix timestamp when the snapshot was taken
        used_bytes: Memory in use
        total_bytes: Memory reserved
        limit_bytes: Upper bound available to the process
    """

    label: str
    timestamp: float
    used_bytes: int
    total_bytes: int
    limit_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["used"] = format_megabytes(self.used_bytes)
        data["total"] = format_megabytes(self.total_bytes)
        data["limit"] = format_megabytes(self.limit_bytes)
        return data


@dataclass
class RenderStats:
    """
    Aggregated render timings for one label.

    Attributes:
        count: Number of closed renders
        total_time: Sum of durations (ms)
        min_time: Fastest render (ms)
        max_time: Slowest render (ms)
        avg_time: total_time / count (ms)
    """

    count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0
    avg_time: float = 0.0

    def update(self, duration: float) -> None:
        self.count += 1
        self.total_time += duration
        self.min_time = min(self.min_time, duration)
        self.max_time = max(self.max_time, duration)
        self.avg_time = self.total_time / self.count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "total_time": self.total_time,
            "min_time": self.min_time,
            "max_time": self.max_time,
            "avg_time": self.avg_time,
        }


@dataclass
class PerformanceSummary:
    """
    On-demand statistics derived from retained records.

    Stale as soon as the monitor records anything else.

    Attributes:
        render_summary: Per-label statistics over closed render records
        memory_snapshots: Most recent snapshots, oldest first
        timestamp: Unix timestamp when the summary was produced
    """

    render_summary: Dict[str, RenderStats] = field(default_factory=dict)
    memory_snapshots: List[MemorySnapshot] = field(default_factory=list)
    timestamp: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "render_summary": {
                label: stats.to_dict() for label, stats in self.render_summary.items()
            },
            "memory_snapshots": [snapshot.to_dict() for snapshot in self.memory_snapshots],
            "timestamp": self.timestamp,
        }
