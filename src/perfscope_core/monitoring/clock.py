"""
Monotonic time source used for all durations.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import time
from typing import Callable

# Returns milliseconds; must never go backward
Clock = Callable[[], float]


def monotonic_ms() -> float:
    """High-resolution monotonic clock reading in milliseconds."""
    return time.perf_counter() * 1000.0
