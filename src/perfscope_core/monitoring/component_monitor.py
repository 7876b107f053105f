"""
Label-bound accessor for UI lifecycle glue.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional, Union

from .models import LifecycleEvent

if TYPE_CHECKING:
    from .performance_monitor import PerformanceMonitor


class ComponentMonitor:
    """
    Thin view over a PerformanceMonitor with a fixed label.

    Example:
        ```python
        perf = monitor.for_component("ChatScreen")
        perf.log_lifecycle(LifecycleEvent.MOUNT)

        with perf.render():
            draw_chat()
        ```
    """

    def __init__(self, monitor: "PerformanceMonitor", label: str) -> None:
        self._monitor = monitor
        self.label = label

    def start_render(self) -> Optional[str]:
        return self._monitor.start_render(self.label)

    def end_render(self, token: Optional[str]) -> None:
        self._monitor.end_render(token)

    def log_lifecycle(
        self, event: Union[LifecycleEvent, str], extra: Optional[Dict[str, Any]] = None
    ) -> None:
        self._monitor.log_component_lifecycle(self.label, event, extra)

    @contextmanager
    def render(self) -> Iterator[Optional[str]]:
        with self._monitor.track_render(self.label) as token:
            yield token

    def __repr__(self) -> str:
        return f"ComponentMonitor(label={self.label!r}, enabled={self._monitor.enabled})"
