"""In-phase audio counter scheduling."""

import logging
import math
from typing import Optional

from ..entities.audio import AudioCue, CueKind
from ..entities.breathing_session import BreathingSession
from ..entities.counter import CounterFrequency, CounterSettings, CounterSoundType

logger = logging.getLogger(__name__)

VOICE_MIN_COUNT = 1
VOICE_MAX_COUNT = 10


class CounterScheduler:
    """
    Decides, on every tick, whether a new integer count is due within the
    current phase.

    Counts are ``floor(elapsed) + 1`` where elapsed is the phase duration
    minus the remaining time. The configured frequency narrows which counts
    are announced, and the same count is never announced twice in a row.
    """

    def __init__(self, settings: Optional[CounterSettings] = None):
        self.settings = settings or CounterSettings()

    def due_count(self, phase_duration: float, time_left: float, last_count: int) -> Optional[int]:
        """
        Return the count to announce now, or None.

        Args:
            phase_duration: Full duration of the current phase in seconds
            time_left: Remaining seconds in the phase
            last_count: Count announced most recently in this phase (0 if none)
        """
        if not self.settings.enabled:
            return None

        elapsed = round(phase_duration - time_left, 6)
        new_count = math.floor(elapsed) + 1
        if new_count == last_count:
            return None

        frequency = self.settings.frequency
        if frequency == CounterFrequency.EVERY_SECOND:
            return new_count

        if frequency == CounterFrequency.HALF_WAY:
            halfway = math.ceil(phase_duration / 2)
            if new_count in (halfway, phase_duration):
                return new_count
            return None

        quarter = math.ceil(phase_duration / 4)
        if new_count in (quarter, quarter * 2, quarter * 3, phase_duration):
            return new_count
        return None

    def cue_for(self, count: int) -> Optional[AudioCue]:
        """Audio cue for an announced count according to the sound type."""
        sound = self.settings.sound
        if sound == CounterSoundType.BEEP:
            return AudioCue(CueKind.COUNTER_BEEP, count)
        if sound == CounterSoundType.TONE:
            return AudioCue(CueKind.COUNTER_TONE, count)
        if sound == CounterSoundType.VOICE and VOICE_MIN_COUNT <= count <= VOICE_MAX_COUNT:
            return AudioCue(CueKind.COUNTER_VOICE, count)
        return None

    def tick(self, session: BreathingSession) -> Optional[int]:
        """Advance the session's sub-count; returns the newly announced count."""
        if not session.is_running:
            return None

        count = self.due_count(session.phase_duration, session.time_left, session.current_count)
        if count is None:
            return None

        session.current_count = count
        logger.debug(f"Counter {count} in phase {session.phase.value}")
        return count
