"""
Interval timers for the unlock controller's cooldown.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class AsyncioTimerHandle:
    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    def cancel(self) -> None:
        self._task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._task.done()


class AsyncioIntervalTimer:
    """Calls back every `interval` seconds on the running event loop."""

    def start(self, interval: float, callback: Callable[[], None]) -> AsyncioTimerHandle:
        async def _run() -> None:
            while True:
                await asyncio.sleep(interval)
                callback()

        return AsyncioTimerHandle(asyncio.get_running_loop().create_task(_run()))


@dataclass
class ManualTimerHandle:
    interval: float
    callback: Callable[[], None]
    elapsed: float = 0.0
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualTimer:
    """Timer driven explicitly by `advance()` (tests, simulations)."""

    handles: list[ManualTimerHandle] = field(default_factory=list)

    def start(self, interval: float, callback: Callable[[], None]) -> ManualTimerHandle:
        handle = ManualTimerHandle(interval=interval, callback=callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self) -> list[ManualTimerHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float, step: float = 1.0) -> None:
        """Simulate `seconds` of wall time in `step` increments."""
        steps = int(round(seconds / step))
        for _ in range(steps):
            for handle in self.active:
                handle.elapsed += step
                if handle.elapsed + 1e-9 >= handle.interval:
                    handle.elapsed = 0.0
                    handle.callback()
