"""Scheduler backed by the asyncio event loop."""

import asyncio
from typing import Callable, Optional

from ..domain.interfaces.scheduler import Scheduler


class AsyncioScheduler(Scheduler):
    """Schedules callbacks with ``loop.call_later``.

    The loop is resolved lazily so the scheduler can be created before the
    event loop starts running.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)
