"""Guided-breathing session controller."""

import logging
import math
from datetime import datetime
from typing import Callable, Optional

from ..entities.audio import AudioCue, CueKind
from ..entities.breathing_pattern import BreathingPattern, CustomDurations
from ..entities.breathing_session import BreathingSession, SessionStatus
from ..entities.counter import CounterSettings
from ..entities.messages import (
    CounterTickMessage,
    CycleCompletedMessage,
    OutboundMessage,
    PhaseChangedMessage,
    SessionCompletedMessage,
    SessionExitedMessage,
    SessionResetMessage,
    SessionStartedMessage,
    StatusChangedMessage,
    TimerTickMessage,
)
from ..entities.session_summary import SessionSummary
from ..interfaces.audio_cue_player import AudioCuePlayer
from ..interfaces.scheduler import ScheduledCall, Scheduler
from .audio_cues import phase_cue, play_cue_safely
from .counter_scheduler import CounterScheduler

logger = logging.getLogger(__name__)


class BreathingSessionController:
    """
    Finite state machine advancing a breathing session phase by phase.

    The controller owns at most one session. While running it re-arms a
    single scheduled tick every ``tick_interval`` seconds; each tick lowers
    the remaining phase time by ``tick_step`` (floored at zero). When a phase
    runs out the controller:

    1. resets the sub-count and looks up the next phase in the pattern,
    2. separately checks whether the phase just left closes a cycle,
    3. either finishes the session (cycle target reached) or plays the
       entering cue and installs the next phase.

    All state changes happen on the scheduler's thread of control or through
    explicit user actions, so no locking is needed.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        cue_player: Optional[AudioCuePlayer] = None,
        emit: Optional[Callable[[OutboundMessage], None]] = None,
        counter_settings: Optional[CounterSettings] = None,
        sound_enabled: bool = True,
        tick_interval: float = 0.1,
        tick_step: float = 0.1,
        clock: Callable[[], datetime] = datetime.utcnow,
        on_complete: Optional[Callable[[SessionSummary], None]] = None,
    ):
        self.scheduler = scheduler
        self.cue_player = cue_player
        self.emit = emit
        self.counter = CounterScheduler(counter_settings)
        self.sound_enabled = sound_enabled
        self.tick_interval = tick_interval
        self.tick_step = tick_step
        self.clock = clock
        self.on_complete = on_complete

        self.session: Optional[BreathingSession] = None
        self.last_summary: Optional[SessionSummary] = None
        self._handle: Optional[ScheduledCall] = None

    # ===== User actions =====

    def start(
        self,
        pattern: BreathingPattern,
        total_cycles: int = 3,
        custom_durations: Optional[CustomDurations] = None,
    ) -> BreathingSession:
        """Arm a new session at the pattern's initial phase and start ticking."""
        self._cancel_tick()

        snapshot = pattern.with_custom_durations(custom_durations)
        session = BreathingSession.for_pattern(snapshot, total_cycles)
        session.status = SessionStatus.ACTIVE
        session.started_at = self.clock()
        self.session = session
        self.last_summary = None

        logger.info(
            f"Session {session.id} started: pattern={snapshot.id}, "
            f"cycles={total_cycles}, phase={session.phase.value}"
        )
        self._emit(SessionStartedMessage(
            session_id=str(session.id),
            pattern_id=snapshot.id,
            pattern_name=snapshot.name,
            phase=session.phase,
            time_left=session.time_left,
            total_cycles=session.total_cycles,
        ))
        self._play_sound(phase_cue(session.phase))
        self._evaluate()
        return session

    def pause(self) -> None:
        session = self.session
        if session is None or not session.is_running:
            return

        self._cancel_tick()
        session.status = SessionStatus.PAUSED
        logger.info(f"Session {session.id} paused at {session.time_left:.1f}s in {session.phase.value}")
        self._emit(StatusChangedMessage(status=session.status, time_left=session.time_left))

    def resume(self) -> None:
        """Continue a paused session, or run a session that was reset."""
        session = self.session
        if session is None or session.status not in (SessionStatus.PAUSED, SessionStatus.READY):
            return

        if session.status == SessionStatus.READY:
            session.started_at = self.clock()
        session.status = SessionStatus.ACTIVE
        logger.info(f"Session {session.id} resumed at {session.time_left:.1f}s in {session.phase.value}")
        self._emit(StatusChangedMessage(status=session.status, time_left=session.time_left))
        self._evaluate()

    def toggle(self) -> None:
        if self.session is not None and self.session.is_running:
            self.pause()
        else:
            self.resume()

    def reset(self) -> None:
        """Back to the initial phase with zero cycles; keeps the pattern."""
        session = self.session
        if session is None:
            return

        self._cancel_tick()
        pattern = session.pattern
        session.phase = pattern.initial_phase
        session.time_left = pattern.duration_for(pattern.initial_phase)
        session.cycles_completed = 0
        session.current_count = 0
        session.status = SessionStatus.READY
        logger.info(f"Session {session.id} reset")
        self._emit(SessionResetMessage(phase=session.phase, time_left=session.time_left))

    def exit(self) -> None:
        """Discard the session and return to pattern selection."""
        if self.session is None:
            return

        self._cancel_tick()
        logger.info(f"Session {self.session.id} exited")
        self.session = None
        self._emit(SessionExitedMessage())

    # ===== Clock =====

    def tick(self) -> None:
        """Advance the clock by one step."""
        session = self.session
        if session is None or not session.is_running:
            return

        session.time_left = max(round(session.time_left - self.tick_step, 6), 0.0)
        self._emit(TimerTickMessage(phase=session.phase, time_left=session.time_left))
        self._evaluate()

    def _evaluate(self) -> None:
        session = self.session
        if session is None or not session.is_running:
            return

        if session.time_left <= 0 and not self._advance_phase(session):
            return

        count = self.counter.tick(session)
        if count is not None:
            self._emit(CounterTickMessage(phase=session.phase, count=count))
            cue = self.counter.cue_for(count)
            if cue is not None:
                play_cue_safely(self.cue_player, cue)

        self._schedule_tick()

    def _advance_phase(self, session: BreathingSession) -> bool:
        """Leave the elapsed phase. Returns False when the session finished."""
        session.current_count = 0
        pattern = session.pattern
        leaving = session.phase
        next_phase = pattern.next_phase(leaving)

        if pattern.closes_cycle(leaving):
            session.cycles_completed += 1
            logger.info(f"Session {session.id} cycle {session.cycles_completed}/{session.total_cycles} complete")
            self._emit(CycleCompletedMessage(
                cycles_completed=session.cycles_completed,
                total_cycles=session.total_cycles,
            ))
            if session.cycles_completed >= session.total_cycles:
                self._complete(session)
                return False

        self._play_sound(phase_cue(next_phase))
        session.phase = next_phase
        session.time_left = pattern.duration_for(next_phase)
        logger.debug(f"Session {session.id} entered {next_phase.value} for {session.time_left}s")
        self._emit(PhaseChangedMessage(
            phase=session.phase,
            duration=session.time_left,
            cycles_completed=session.cycles_completed,
        ))
        return True

    def _complete(self, session: BreathingSession) -> None:
        session.status = SessionStatus.COMPLETED
        session.cycles_completed = 0
        self._cancel_tick()

        elapsed = (self.clock() - session.started_at).total_seconds() if session.started_at else 0
        summary = SessionSummary(
            pattern_id=session.pattern.id,
            pattern_name=session.pattern.name,
            duration_seconds=max(math.floor(elapsed + 0.5), 0),
            cycles_completed=session.total_cycles,
        )
        self.last_summary = summary

        self._play_sound(AudioCue(CueKind.COMPLETION))
        logger.info(
            f"Session {session.id} complete: {summary.cycles_completed} cycles "
            f"in {summary.formatted_duration}"
        )
        self._emit(SessionCompletedMessage(summary=summary))
        if self.on_complete:
            self.on_complete(summary)

    # ===== Helpers =====

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._handle = self.scheduler.call_later(self.tick_interval, self.tick)

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _play_sound(self, cue: AudioCue) -> None:
        if self.sound_enabled:
            play_cue_safely(self.cue_player, cue)

    def _emit(self, message: OutboundMessage) -> None:
        if self.emit:
            self.emit(message)

    def get_session_state(self) -> Optional[dict]:
        """Current session as a dictionary, or None without a session."""
        session = self.session
        if session is None:
            return None
        return {
            "session_id": str(session.id),
            "pattern_id": session.pattern.id,
            "phase": session.phase.value,
            "time_left": session.time_left,
            "cycles_completed": session.cycles_completed,
            "total_cycles": session.total_cycles,
            "status": session.status.value,
            "current_count": session.current_count,
            "started_at": session.started_at.isoformat() if session.started_at else None,
        }
