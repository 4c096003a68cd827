"""Pre-session countdown."""

import logging
from typing import Callable, Optional

from ..entities.audio import AudioCue, CueKind
from ..entities.messages import CountdownTickMessage, OutboundMessage
from ..interfaces.audio_cue_player import AudioCuePlayer
from ..interfaces.scheduler import ScheduledCall, Scheduler
from .audio_cues import play_cue_safely

logger = logging.getLogger(__name__)


class BreathingCountdown:
    """
    Short "3-2-1-Begin" pre-roll before a session is armed.

    Each step lasts ``step_seconds``. The completion callback runs one step
    after "Begin" (count 0) is shown.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        cue_player: Optional[AudioCuePlayer] = None,
        emit: Optional[Callable[[OutboundMessage], None]] = None,
        start_count: int = 3,
        step_seconds: float = 1.0,
        sound_enabled: bool = True,
    ):
        self.scheduler = scheduler
        self.cue_player = cue_player
        self.emit = emit
        self.start_count = start_count
        self.step_seconds = step_seconds
        self.sound_enabled = sound_enabled

        self.count: int = start_count
        self._on_complete: Optional[Callable[[], None]] = None
        self._handle: Optional[ScheduledCall] = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(self, on_complete: Callable[[], None]) -> None:
        """Begin counting down; restarts if already running."""
        self.cancel()
        self._on_complete = on_complete
        self.count = self.start_count
        logger.info(f"Countdown started from {self.start_count}")
        self._announce()
        self._handle = self.scheduler.call_later(self.step_seconds, self._step)

    def cancel(self) -> None:
        """Stop the countdown without completing it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.info("Countdown cancelled")
        self._on_complete = None

    def _step(self) -> None:
        if self.count > 0:
            self.count -= 1
            self._announce()
            self._handle = self.scheduler.call_later(self.step_seconds, self._step)
            return

        self._handle = None
        on_complete, self._on_complete = self._on_complete, None
        logger.info("Countdown complete")
        if on_complete:
            on_complete()

    def _announce(self) -> None:
        if self.emit:
            self.emit(CountdownTickMessage(count=self.count))
        if self.sound_enabled:
            play_cue_safely(self.cue_player, AudioCue(CueKind.COUNTDOWN, self.count))
