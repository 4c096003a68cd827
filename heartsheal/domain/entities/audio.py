"""Audio cue entities."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CueKind(str, Enum):
    """Kinds of audio cue the breathing core can request."""
    INHALE = "inhale-cue"
    HOLD = "hold-cue"
    EXHALE = "exhale-cue"
    COMPLETION = "completion-cue"
    COUNTER_BEEP = "counter-beep"
    COUNTER_TONE = "counter-tone"
    COUNTER_VOICE = "counter-voice"
    COUNTDOWN = "countdown-cue"


@dataclass(frozen=True)
class AudioCue:
    """A single fire-and-forget cue.

    ``count`` carries the spoken number for voice cues and the remaining
    count for countdown cues.
    """

    kind: CueKind
    count: Optional[int] = None
