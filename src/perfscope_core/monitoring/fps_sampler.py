"""
Frame-rate sampling driven by a per-frame async iterator.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import asyncio
import math
from typing import Any, AsyncIterator, Callable, Optional

from .clock import Clock

# Factory for an iterator that yields once per display refresh
FrameSource = Callable[[], AsyncIterator[Any]]


def display_frames(refresh_hz: float = 60.0) -> FrameSource:
    """
    Build a frame source that ticks at refresh_hz using asyncio.sleep.

    Args:
        refresh_hz: Target refresh rate in Hz

    Returns:
        FrameSource yielding the frame number, forever
    """
    if refresh_hz <= 0:
        raise ValueError(f"refresh_hz must be > 0, got {refresh_hz}")

    frame_interval = 1.0 / refresh_hz

    async def frames() -> AsyncIterator[int]:
        frame = 0
        while True:
            await asyncio.sleep(frame_interval)
            frame += 1
            yield frame

    return frames


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class FrameRateSampler:
    """
    Estimates frames per second and warns when it drops below a floor.

    Sampling runs as a background asyncio.Task so the owner can stop it.
    Frames are counted as the source yields them; once at least
    sample_interval_ms has elapsed since the last measurement, the FPS is
    computed, the counter is reset and the anchor moves to now. The loop
    also ends on its own when the frame source is exhausted.

    Thread-safe: No (single event loop only)
    """

    def __init__(
        self,
        enabled: bool,
        clock: Clock,
        logger: Any,
        frame_source: FrameSource,
        low_fps_threshold: int = 50,
        sample_interval_ms: float = 1000.0,
    ) -> None:
        self._enabled = enabled
        self._clock = clock
        self._logger = logger
        self._frame_source = frame_source
        self._low_fps_threshold = low_fps_threshold
        self._sample_interval_ms = sample_interval_ms
        self._task: Optional[asyncio.Task] = None
        self.last_fps: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> Optional[asyncio.Task]:
        """
        Begin sampling on the running event loop.

        Returns:
            Task handle (the existing one if already sampling), or None when
            disabled or no event loop is running
        """
        if not self._enabled:
            return None

        if self.is_running:
            return self._task

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop means no frame callbacks to sample
            return None

        self._task = loop.create_task(self._sample(), name="perfscope-fps-sampler")
        self._task.add_done_callback(self._on_done)
        return self._task

    def stop(self) -> None:
        """Cancel the sampling task if one is running."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return

        error = task.exception()
        if error is not None:
            self._logger.error(
                "fps_sampling_failed", error_type=type(error).__name__, error=str(error)
            )

    async def _sample(self) -> None:
        frame_count = 0
        last_time = self._clock()

        async for _ in self._frame_source():
            frame_count += 1
            current_time = self._clock()
            elapsed = current_time - last_time

            if elapsed >= self._sample_interval_ms:
                fps = _round_half_up(frame_count * 1000.0 / elapsed)
                self.last_fps = fps

                if fps < self._low_fps_threshold:
                    self._logger.warning(
                        "low_fps_detected", fps=fps, threshold=self._low_fps_threshold
                    )

                frame_count = 0
                last_time = current_time
