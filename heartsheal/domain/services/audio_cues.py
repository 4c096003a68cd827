"""Helpers for requesting audio cues."""

import logging
from typing import Optional

from ..entities.audio import AudioCue, CueKind
from ..entities.breathing_pattern import BreathingPhase
from ..interfaces.audio_cue_player import AudioCuePlayer

logger = logging.getLogger(__name__)

_PHASE_CUES = {
    BreathingPhase.INHALE: CueKind.INHALE,
    BreathingPhase.LEFT_NOSTRIL: CueKind.INHALE,
    BreathingPhase.RIGHT_NOSTRIL: CueKind.INHALE,
    BreathingPhase.HOLD1: CueKind.HOLD,
    BreathingPhase.HOLD2: CueKind.HOLD,
    BreathingPhase.EXHALE: CueKind.EXHALE,
}


def phase_cue(phase: BreathingPhase) -> AudioCue:
    """Cue played when entering ``phase``."""
    return AudioCue(_PHASE_CUES[phase])


def play_cue_safely(player: Optional[AudioCuePlayer], cue: AudioCue) -> None:
    """Play a cue, logging and swallowing any playback failure."""
    if player is None:
        return
    try:
        player.play_cue(cue)
    except Exception as e:
        logger.warning(f"Audio cue {cue.kind.value} failed: {e}")
