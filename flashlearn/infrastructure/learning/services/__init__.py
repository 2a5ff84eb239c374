from .asyncio_timer_scheduler import AsyncioTimer, AsyncioTimerScheduler

__all__ = ["AsyncioTimer", "AsyncioTimerScheduler"]
