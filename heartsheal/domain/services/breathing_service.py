"""Breathing service managing one client's breathing sessions."""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID, uuid4

from ..entities.breathing_pattern import BreathingPattern, CustomDurations
from ..entities.breathing_session import SessionStatus
from ..entities.counter import CounterSettings
from ..entities.messages import (
    ErrorOutMessage,
    NoticeMessage,
    OutboundMessage,
    SummarySavedMessage,
)
from ..entities.session_summary import SessionSummary
from ..entities.websocket_messages import ErrorCode
from ..interfaces.audio_cue_player import AudioCuePlayer
from ..interfaces.scheduler import Scheduler
from ..interfaces.session_summary_repository import SessionSummaryRepository
from .breathing_controller import BreathingSessionController
from .countdown import BreathingCountdown

logger = logging.getLogger(__name__)

CuePlayerFactory = Callable[[Callable[[OutboundMessage], None]], AudioCuePlayer]


class BreathingService:
    """
    Per-connection service that owns all breathing session business logic.

    This service owns:
    - The pre-session countdown and the session controller
    - Handoff and persistence of the completed-session summary
    - Emitting events to the WebSocket layer via an async queue

    The service is unit-testable without sockets: inject a manual scheduler
    and read messages off ``outbound_queue``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        summary_repository: SessionSummaryRepository,
        cue_player_factory: Optional[CuePlayerFactory] = None,
        countdown_start: int = 3,
        tick_interval: float = 0.1,
        tick_step: float = 0.1,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.id: UUID = uuid4()
        self.scheduler = scheduler
        self.summary_repository = summary_repository
        self.countdown_start = countdown_start
        self.tick_interval = tick_interval
        self.tick_step = tick_step
        self.clock = clock

        self.outbound_queue: asyncio.Queue[OutboundMessage] = asyncio.Queue()
        self.cue_player: Optional[AudioCuePlayer] = (
            cue_player_factory(self.emit) if cue_player_factory else None
        )

        self.countdown: Optional[BreathingCountdown] = None
        self.controller: Optional[BreathingSessionController] = None
        self.pending_summary: Optional[SessionSummary] = None

        self._running = False

        logger.info(f"BreathingService created: {self.id}")

    # ===== Lifecycle =====

    async def start(self):
        """Mark the service as accepting events."""
        if self._running:
            logger.warning(f"Service {self.id} already running")
            return
        self._running = True
        logger.info(f"BreathingService {self.id} started")

    async def stop(self):
        """Cancel any countdown or session and stop the service."""
        if not self._running:
            return
        self._running = False
        self._cancel_timers()
        logger.info(f"BreathingService {self.id} stopped")

    # ===== Session actions =====

    def select_pattern(
        self,
        pattern: BreathingPattern,
        total_cycles: int = 3,
        custom_durations: Optional[CustomDurations] = None,
        sound_enabled: bool = True,
        counter: Optional[CounterSettings] = None,
    ) -> None:
        """Select a pattern and start the countdown that arms the session."""
        self._cancel_timers()

        self.controller = BreathingSessionController(
            scheduler=self.scheduler,
            cue_player=self.cue_player,
            emit=self.emit,
            counter_settings=counter,
            sound_enabled=sound_enabled,
            tick_interval=self.tick_interval,
            tick_step=self.tick_step,
            clock=self.clock,
            on_complete=self._on_session_complete,
        )
        self.countdown = BreathingCountdown(
            scheduler=self.scheduler,
            cue_player=self.cue_player,
            emit=self.emit,
            start_count=self.countdown_start,
            sound_enabled=sound_enabled,
        )

        logger.info(f"Service {self.id}: pattern {pattern.id} selected, {total_cycles} cycles")
        self.countdown.start(
            lambda: self._on_countdown_complete(pattern, total_cycles, custom_durations)
        )

    def pause(self) -> None:
        if self.controller:
            self.controller.pause()

    def resume(self) -> None:
        if self.controller:
            self.controller.resume()

    def toggle(self) -> None:
        if self.controller:
            self.controller.toggle()

    def reset(self) -> None:
        if self.controller:
            self.controller.reset()

    def exit_session(self) -> None:
        """Leave the current session (or countdown) for pattern selection."""
        if self.countdown:
            self.countdown.cancel()
        if self.controller:
            self.controller.exit()

    async def save_summary(self, notes: Optional[str] = None) -> Optional[SessionSummary]:
        """
        Persist the last completed session with optional notes.

        A failing repository never affects the controller; the failure is
        logged and reported to the client as a notice.

        Returns:
            The saved summary, or None if nothing was saved
        """
        if self.pending_summary is None:
            self.emit(ErrorOutMessage(ErrorCode.NOTHING_TO_SAVE, "No completed session to save"))
            return None

        summary = self.pending_summary.model_copy(update={"notes": notes})
        try:
            await self.summary_repository.save_summary(summary)
        except Exception as e:
            logger.error(f"Failed to save session summary {summary.id}: {e}", exc_info=True)
            self.emit(NoticeMessage("Your session could not be saved"))
            return None

        self.pending_summary = None
        logger.info(f"Saved session summary {summary.id}")
        self.emit(SummarySavedMessage(summary=summary))
        return summary

    # ===== Callbacks =====

    def _on_countdown_complete(
        self,
        pattern: BreathingPattern,
        total_cycles: int,
        custom_durations: Optional[CustomDurations],
    ) -> None:
        if self.controller is None:
            return
        self.controller.start(pattern, total_cycles, custom_durations)

    def _on_session_complete(self, summary: SessionSummary) -> None:
        self.pending_summary = summary

    def _cancel_timers(self) -> None:
        if self.countdown:
            self.countdown.cancel()
        session = self.controller.session if self.controller else None
        if session is not None and session.status != SessionStatus.COMPLETED:
            self.controller.exit()

    # ===== Outbound =====

    def emit(self, message: OutboundMessage) -> None:
        """Queue a message for the client."""
        self.outbound_queue.put_nowait(message)

    def get_session_state(self) -> dict:
        """Get the current service state as a dictionary."""
        if self.countdown and self.countdown.is_running:
            status = SessionStatus.COUNTDOWN.value
        elif self.controller and self.controller.session:
            status = self.controller.session.status.value
        else:
            status = SessionStatus.READY.value

        return {
            "service_id": str(self.id),
            "status": status,
            "countdown": self.countdown.count if self.countdown and self.countdown.is_running else None,
            "session": self.controller.get_session_state() if self.controller else None,
            "pending_summary": self.pending_summary.model_dump(mode="json") if self.pending_summary else None,
        }
