"""Audio cue player protocol."""

from typing import Protocol, runtime_checkable

from ..entities.audio import AudioCue


@runtime_checkable
class AudioCuePlayer(Protocol):
    """Capability that plays short tones, beeps and spoken numbers."""

    def play_cue(self, cue: AudioCue) -> None:
        """Play ``cue``. Fire-and-forget; callers ignore the outcome."""
        ...
