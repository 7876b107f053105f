"""
Render timing: pairs start/end calls and flags slow renders.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import uuid
from typing import Any, Optional

from .bounded_store import BoundedRecordStore
from .clock import Clock
from .models import RenderRecord


class RenderTimingTracker:
    """
    Times render cycles reported by the caller.

    Every start() allocates an independent record keyed by a fresh token, so
    concurrent renders of the same label never collide. end() closes the
    matching record exactly once; unknown, repeated or None tokens are
    ignored. Once the store holds more than its ceiling, each end() evicts
    the single oldest record (open or closed).

    Thread-safe: No (single event loop only)
    """

    def __init__(
        self,
        store: BoundedRecordStore[str, RenderRecord],
        enabled: bool,
        clock: Clock,
        logger: Any,
        slow_render_threshold_ms: float = 16.0,
    ) -> None:
        self._store = store
        self._enabled = enabled
        self._clock = clock
        self._logger = logger
        self._slow_render_threshold_ms = slow_render_threshold_ms

    def start(self, label: str) -> Optional[str]:
        """
        Open a render record.

        Args:
            label: Component or screen name

        Returns:
            Opaque token for end(), or None when monitoring is disabled
        """
        if not self._enabled:
            return None

        start_time = self._clock()
        token = f"{label}_{uuid.uuid4().hex}"
        self._store.insert(token, RenderRecord(label=label, start_time=start_time))
        return token

    def end(self, token: Optional[str]) -> None:
        """
        Close the record identified by token.

        Args:
            token: Value returned by start(); None and unknown tokens are no-ops
        """
        if not self._enabled or token is None:
            return

        record = self._store.get(token)
        if record is None or not record.is_open:
            return

        duration = record.close(self._clock())

        if duration > self._slow_render_threshold_ms:
            self._logger.warning(
                "slow_render_detected",
                label=record.label,
                duration_ms=round(duration, 2),
                threshold_ms=self._slow_render_threshold_ms,
            )

        if self._store.over_capacity:
            self._store.evict_oldest()
