"""Protocols for cancellable timers."""

from collections.abc import Awaitable, Callable
from typing import Protocol

TimerCallback = Callable[[], Awaitable[None]]


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled before it fires."""

    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...

    def remaining(self) -> float:
        """Seconds left before the callback fires (0 once fired or cancelled)."""
        ...


class TimerSchedulerProtocol(Protocol):
    """Schedules coroutine callbacks on a monotonic clock."""

    def schedule(self, delay: float, callback: TimerCallback) -> TimerHandle:
        """
        Run ``callback`` once after ``delay`` seconds.

        Args:
            delay: Delay in seconds
            callback: Coroutine function invoked without arguments

        Returns:
            Handle used to cancel the timer
        """
        ...
