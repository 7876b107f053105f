"""
Memory snapshot recording backed by psutil.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import time
from collections import deque
from typing import Any, Callable, Dict, Optional, Union

import psutil

from perfscope_core.logging_service import LoggingService

from .models import LifecycleEvent, MemorySnapshot, MemoryUsage, format_megabytes

# Returns None when the host cannot report memory usage
MemoryProbe = Callable[[], Optional[MemoryUsage]]

_SNAPSHOT_EVENTS = (LifecycleEvent.MOUNT.value, LifecycleEvent.UNMOUNT.value)


def psutil_memory_probe() -> Optional[MemoryUsage]:
    """
    Read memory usage of the current process.

    Mapping:
        used_bytes  -> process RSS
        total_bytes -> process VMS
        limit_bytes -> total physical memory of the host

    Returns:
        MemoryUsage, or None if psutil cannot introspect this process
    """
    try:
        memory_info = psutil.Process().memory_info()
        limit = psutil.virtual_memory().total
    except psutil.Error:
        # Introspection unavailable (permissions, sandbox)
        return None

    return MemoryUsage(
        used_bytes=memory_info.rss,
        total_bytes=memory_info.vms,
        limit_bytes=limit,
    )


class MemorySnapshotRecorder:
    """
    Keeps a bounded FIFO history of memory snapshots.

    The history deque is owned by the monitor and shared with the summary;
    its maxlen drops the oldest snapshot on overflow.

    Thread-safe: No (single event loop only)
    """

    def __init__(
        self,
        snapshots: "deque[MemorySnapshot]",
        enabled: bool,
        probe: Optional[MemoryProbe],
        logger: Any,
    ) -> None:
        self._snapshots = snapshots
        self._enabled = enabled
        self._probe = probe
        self._logger = logger

    def take_snapshot(self, label: str = "default") -> Optional[MemorySnapshot]:
        """
        Record current memory usage.

        Args:
            label: Snapshot label

        Returns:
            The stored snapshot, or None if disabled or no probe data is available
        """
        if not self._enabled or self._probe is None:
            return None

        usage = self._probe()
        if usage is None:
            return None

        snapshot = MemorySnapshot(
            label=label,
            timestamp=time.time(),
            used_bytes=usage.used_bytes,
            total_bytes=usage.total_bytes,
            limit_bytes=usage.limit_bytes,
        )
        self._snapshots.append(snapshot)

        self._logger.info(
            "memory_snapshot",
            label=label,
            used=format_megabytes(snapshot.used_bytes),
            total=format_megabytes(snapshot.total_bytes),
            limit=format_megabytes(snapshot.limit_bytes),
        )
        return snapshot

    def log_lifecycle_event(
        self,
        label: str,
        event: Union[LifecycleEvent, str],
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a component lifecycle event.

        Mount and unmount events also take a snapshot labelled
        ``<label>_<event>`` so memory growth across a component's lifetime
        can be compared.

        Args:
            label: Component name
            event: LifecycleEvent or any event string
            extra: Additional context; sensitive keys are redacted
        """
        if not self._enabled:
            return

        event_name = event.value if isinstance(event, LifecycleEvent) else str(event)

        self._logger.info(
            "component_lifecycle",
            label=label,
            lifecycle_event=event_name,
            extra=LoggingService.sanitize_metadata(extra or {}),
        )

        if event_name in _SNAPSHOT_EVENTS:
            self.take_snapshot(f"{label}_{event_name}")
