"""Scheduler protocol used to drive timers."""

from typing import Callable, Protocol, runtime_checkable


class ScheduledCall(Protocol):
    """Handle to a pending callback."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Protocol for scheduling delayed callbacks.

    Implementations run callbacks on a single logical thread, so the
    breathing controller never needs locking.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Schedule ``callback`` to run after ``delay`` seconds.

        Args:
            delay: Seconds to wait.
            callback: Zero-argument callable.

        Returns:
            ScheduledCall: Handle that can cancel the callback.
        """
        ...
