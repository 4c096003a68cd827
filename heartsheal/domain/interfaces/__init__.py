"""Domain interfaces for the breathing coach."""

from .audio_cue_player import AudioCuePlayer
from .pattern_provider import PatternProvider
from .scheduler import ScheduledCall, Scheduler
from .session_summary_repository import SessionSummaryRepository

__all__ = [
    "AudioCuePlayer",
    "PatternProvider",
    "ScheduledCall",
    "Scheduler",
    "SessionSummaryRepository",
]
