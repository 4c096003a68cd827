"""Outbound message entities."""

from dataclasses import dataclass, field
from datetime import datetime

from .breathing_pattern import BreathingPhase
from .breathing_session import SessionStatus
from .session_summary import SessionSummary
from .websocket_messages import ErrorCode, ErrorMessage, ServerNotice


class OutboundMessage:
    """Base class for outbound messages."""

    pass


@dataclass
class AudioOutMessage(OutboundMessage):
    """Message containing PCM16LE cue audio."""

    pcm_bytes: bytes
    timestamp: float = field(default_factory=lambda: datetime.utcnow().timestamp())


@dataclass
class SpeakMessage(OutboundMessage):
    """Text the client should speak aloud."""

    text: str


@dataclass
class CountdownTickMessage(OutboundMessage):
    """Pre-session countdown step; 0 means "Begin"."""

    count: int


@dataclass
class SessionStartedMessage(OutboundMessage):
    """The session controller has been armed."""

    session_id: str
    pattern_id: str
    pattern_name: str
    phase: BreathingPhase
    time_left: float
    total_cycles: int


@dataclass
class PhaseChangedMessage(OutboundMessage):
    """A new phase has been installed."""

    phase: BreathingPhase
    duration: float
    cycles_completed: int


@dataclass
class TimerTickMessage(OutboundMessage):
    """Remaining time after a clock tick."""

    phase: BreathingPhase
    time_left: float


@dataclass
class CounterTickMessage(OutboundMessage):
    """A sub-count announced within the current phase."""

    phase: BreathingPhase
    count: int


@dataclass
class CycleCompletedMessage(OutboundMessage):
    """A full cycle closed."""

    cycles_completed: int
    total_cycles: int


@dataclass
class SessionCompletedMessage(OutboundMessage):
    """The cycle target was reached."""

    summary: SessionSummary


@dataclass
class StatusChangedMessage(OutboundMessage):
    """The session was paused or resumed."""

    status: SessionStatus
    time_left: float


@dataclass
class SessionResetMessage(OutboundMessage):
    """The session was manually reset."""

    phase: BreathingPhase
    time_left: float


@dataclass
class SessionExitedMessage(OutboundMessage):
    """The user went back to pattern selection."""

    reason: str = "exit"


@dataclass
class SummarySavedMessage(OutboundMessage):
    """A completed session was persisted."""

    summary: SessionSummary


@dataclass
class NoticeMessage(OutboundMessage):
    """Message containing a notice."""

    message: str
    notice: ServerNotice = field(init=False)

    def __post_init__(self):
        self.notice = ServerNotice(message=self.message)


@dataclass
class ErrorOutMessage(OutboundMessage):
    """Message containing an error."""

    code: ErrorCode
    message: str
    error: ErrorMessage = field(init=False)

    def __post_init__(self):
        self.error = ErrorMessage(code=self.code, message=self.message)
