"""Audio cue player that only logs cues."""

import logging

from ..domain.entities.audio import AudioCue
from ..domain.interfaces.audio_cue_player import AudioCuePlayer

logger = logging.getLogger(__name__)


class LoggingCuePlayer(AudioCuePlayer):
    """Silent player for headless runs; records each cue in the log."""

    def play_cue(self, cue: AudioCue) -> None:
        if cue.count is None:
            logger.info(f"Cue: {cue.kind.value}")
        else:
            logger.info(f"Cue: {cue.kind.value} ({cue.count})")
