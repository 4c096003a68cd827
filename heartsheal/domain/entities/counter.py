"""Audio counter settings."""

from enum import Enum

from pydantic import BaseModel


class CounterSoundType(str, Enum):
    """Sound played for each announced count."""
    BEEP = "beep"
    TONE = "tone"
    VOICE = "voice"
    NONE = "none"


class CounterFrequency(str, Enum):
    """Which counts within a phase get announced."""
    EVERY_SECOND = "every-second"
    HALF_WAY = "half-way"
    QUARTER_POINTS = "quarter-points"


class CounterSettings(BaseModel):
    """User configuration of the in-phase audio counter."""

    enabled: bool = False
    sound: CounterSoundType = CounterSoundType.BEEP
    frequency: CounterFrequency = CounterFrequency.EVERY_SECOND
