"""Timer scheduler backed by the running asyncio event loop."""

import asyncio

import structlog

from flashlearn.application.learning.protocols.timer_scheduler import TimerCallback

logger = structlog.get_logger(__name__)


class AsyncioTimer:
    """
    One-shot timer running its callback in a task of the event loop.

    Once the callback has started, ``cancel()`` no longer interrupts it: a
    callback that cancels its own timer keeps running to completion.
    """

    def __init__(
        self, loop: asyncio.AbstractEventLoop, delay: float, callback: TimerCallback
    ) -> None:
        self._loop = loop
        self._deadline = loop.time() + delay
        self._cancelled = False
        self._fired = False
        self._task = loop.create_task(self._run(delay, callback))

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def remaining(self) -> float:
        if self._cancelled or self._fired:
            return 0.0
        return max(0.0, self._deadline - self._loop.time())

    def cancel(self) -> None:
        if self._cancelled or self._fired:
            return
        self._cancelled = True
        self._task.cancel()

    async def _run(self, delay: float, callback: TimerCallback) -> None:
        await asyncio.sleep(delay)
        self._fired = True
        try:
            await callback()
        except Exception:
            logger.exception("timer_callback_failed")


class AsyncioTimerScheduler:
    """Schedules callbacks with ``asyncio.sleep`` on the loop's monotonic clock."""

    def schedule(self, delay: float, callback: TimerCallback) -> AsyncioTimer:
        return AsyncioTimer(asyncio.get_running_loop(), delay, callback)
