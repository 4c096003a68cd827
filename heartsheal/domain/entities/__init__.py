"""Domain entities for the breathing coach."""

from .audio import AudioCue, CueKind
from .breathing_pattern import (
    CUSTOM_PATTERN_ID,
    AnimationType,
    BreathingPattern,
    BreathingPhase,
    CustomDurations,
    PatternCategory,
    PhaseStyle,
)
from .breathing_session import BreathingSession, SessionStatus
from .counter import CounterFrequency, CounterSettings, CounterSoundType
from .messages import (
    AudioOutMessage,
    CountdownTickMessage,
    CounterTickMessage,
    CycleCompletedMessage,
    ErrorOutMessage,
    NoticeMessage,
    OutboundMessage,
    PhaseChangedMessage,
    SessionCompletedMessage,
    SessionExitedMessage,
    SessionResetMessage,
    SessionStartedMessage,
    SpeakMessage,
    StatusChangedMessage,
    SummarySavedMessage,
    TimerTickMessage,
)
from .session_summary import SessionSummary
from .websocket_messages import (
    ErrorCode,
    ErrorMessage,
    ServerNotice,
    SessionCreate,
    SummarySave,
)

__all__ = [
    # Pattern entities
    "BreathingPattern",
    "BreathingPhase",
    "CustomDurations",
    "PatternCategory",
    "AnimationType",
    "PhaseStyle",
    "CUSTOM_PATTERN_ID",
    # Session entities
    "BreathingSession",
    "SessionStatus",
    "SessionSummary",
    # Counter entities
    "CounterSettings",
    "CounterSoundType",
    "CounterFrequency",
    # Audio entities
    "AudioCue",
    "CueKind",
    # Message entities
    "OutboundMessage",
    "AudioOutMessage",
    "SpeakMessage",
    "CountdownTickMessage",
    "SessionStartedMessage",
    "PhaseChangedMessage",
    "TimerTickMessage",
    "CounterTickMessage",
    "CycleCompletedMessage",
    "SessionCompletedMessage",
    "StatusChangedMessage",
    "SessionResetMessage",
    "SessionExitedMessage",
    "SummarySavedMessage",
    "NoticeMessage",
    "ErrorOutMessage",
    # WebSocket message entities
    "SessionCreate",
    "SummarySave",
    "ServerNotice",
    "ErrorMessage",
    "ErrorCode",
]
