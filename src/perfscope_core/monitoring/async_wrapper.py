"""
Timing wrapper for asynchronous operations.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from .clock import Clock

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Settled operation that returned a value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Settled operation that raised; error is the original exception object."""

    error: Exception


Outcome = Union[Success[T], Failure]


async def capture(operation: Callable[[], Awaitable[T]]) -> Outcome[T]:
    """
    Await operation and record how it settled.

    Only Exception subclasses are captured; asyncio.CancelledError and other
    BaseExceptions propagate immediately.
    """
    try:
        return Success(await operation())
    except Exception as e:
        return Failure(e)


def unwrap(outcome: Outcome[T]) -> T:
    """Return the value of a Success, or re-raise the exact error of a Failure."""
    if isinstance(outcome, Failure):
        raise outcome.error
    return outcome.value


class OperationTimer:
    """
    Measures arbitrary awaitable work without changing its behaviour.

    The timer is a pure observer: results are returned unchanged and
    failures are re-raised as the same exception object after the timing
    diagnostic is logged. It suspends only while awaiting the operation.

    Example:
        ```python
        timer = OperationTimer(enabled=True, clock=monotonic_ms, logger=logger)
        user = await timer.measure("fetch_user", lambda: api.get_user(42))
        ```
    """

    def __init__(
        self,
        enabled: bool,
        clock: Clock,
        logger: Any,
        slow_operation_threshold_ms: float = 1000.0,
    ) -> None:
        self._enabled = enabled
        self._clock = clock
        self._logger = logger
        self._slow_operation_threshold_ms = slow_operation_threshold_ms

    async def measure(self, operation_name: str, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run operation and log how long it took.

        Args:
            operation_name: Name used in diagnostics
            operation: Zero-argument callable returning an awaitable

        Returns:
            Whatever operation returned

        Raises:
            Exception: Whatever operation raised, unchanged
        """
        if not self._enabled:
            return await operation()

        start_time = self._clock()
        self._logger.info("async_operation_started", operation=operation_name)

        outcome = await capture(operation)
        duration = self._clock() - start_time

        if isinstance(outcome, Failure):
            self._logger.error(
                "async_operation_failed",
                operation=operation_name,
                duration_ms=round(duration, 2),
                error_type=type(outcome.error).__name__,
                error=str(outcome.error),
            )
            return unwrap(outcome)

        self._logger.info(
            "async_operation_completed",
            operation=operation_name,
            duration_ms=round(duration, 2),
        )

        if duration > self._slow_operation_threshold_ms:
            self._logger.warning(
                "slow_operation_detected",
                operation=operation_name,
                duration_ms=round(duration, 2),
                threshold_ms=self._slow_operation_threshold_ms,
            )

        return unwrap(outcome)
