"""
TickScheduler — cancellable, reschedulable repeating task.

reschedule(interval) replaces any running loop; reschedule(None) stops it.
The sleep function is injectable so tests can drive ticks without waiting.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from backend_points.points_logging import get_logger

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class TickScheduler:
    def __init__(
        self,
        on_tick: Callable[[], Awaitable[None] | None],
        *,
        sleep: SleepFn = asyncio.sleep,
        name: str = "tick",
    ) -> None:
        self._on_tick = on_tick
        self._sleep = sleep
        self._name = name
        self._interval: float | None = None
        self._task: asyncio.Task | None = None

    @property
    def interval(self) -> float | None:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def reschedule(self, interval_sec: float | None) -> None:
        """Run every interval_sec; None stops. Same interval while running is a no-op."""
        if interval_sec is not None and interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        if self.running and interval_sec == self._interval:
            return
        self._cancel()
        self._interval = interval_sec
        if interval_sec is None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(interval_sec))
        logger.debug("scheduler_started", scheduler=self._name, interval_sec=interval_sec)

    def _cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("scheduler_cancelled", scheduler=self._name)
        self._task = None

    async def stop(self) -> None:
        task = self._task
        self._cancel()
        self._interval = None
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _run(self, interval_sec: float) -> None:
        while True:
            await self._sleep(interval_sec)
            try:
                result = self._on_tick()
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.exception("scheduler_tick_failed", scheduler=self._name, error=str(e))
