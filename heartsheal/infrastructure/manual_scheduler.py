"""Deterministic scheduler with a virtual clock.

Used by tests and simulations to drive the breathing controller without
real waits.
"""

import heapq
import itertools
from datetime import datetime, timedelta
from typing import Callable, List, Tuple

from ..domain.interfaces.scheduler import Scheduler


class ManualCall:
    """Handle for a callback registered with ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Scheduler whose time only moves when ``advance`` is called."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 9, 0, 0)):
        self.start = start
        self.time: float = 0.0
        self._queue: List[Tuple[float, int, ManualCall]] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        call = ManualCall(round(self.time + delay, 6), callback)
        heapq.heappush(self._queue, (call.due, next(self._sequence), call))
        return call

    def now(self) -> datetime:
        """Wall clock matching the virtual time."""
        return self.start + timedelta(seconds=self.time)

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """Run every callback due within ``seconds``; returns how many ran.

        Callbacks scheduled while advancing run too if they fall due
        inside the window.
        """
        target = round(self.time + seconds, 6)
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.time = due
            call.cancelled = True
            call.callback()
            ran += 1
        self.time = target
        return ran

    def run_until_idle(self, limit: float = 3600.0) -> int:
        """Advance until nothing is pending or ``limit`` seconds have passed."""
        ran = 0
        deadline = round(self.time + limit, 6)
        while self.pending and self.time < deadline:
            next_due = min(call.due for _, _, call in self._queue if not call.cancelled)
            ran += self.advance(min(next_due, deadline) - self.time)
        return ran
