"""Audio cue player that synthesizes PCM16LE tones for the client."""

import logging
import math
import struct
from dataclasses import dataclass
from typing import Callable, Dict

from ..domain.entities.audio import AudioCue, CueKind
from ..domain.entities.messages import AudioOutMessage, OutboundMessage, SpeakMessage
from ..domain.interfaces.audio_cue_player import AudioCuePlayer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToneSpec:
    """Sine tone parameters."""

    frequency: float
    duration_ms: int
    volume: float
    fade: bool = False


PHASE_TONES: Dict[CueKind, ToneSpec] = {
    CueKind.INHALE: ToneSpec(700, 150, 0.4),
    CueKind.HOLD: ToneSpec(500, 150, 0.3),
    CueKind.EXHALE: ToneSpec(400, 150, 0.3),
    CueKind.COMPLETION: ToneSpec(900, 300, 0.5),
    CueKind.COUNTER_BEEP: ToneSpec(800, 200, 0.5),
    CueKind.COUNTER_TONE: ToneSpec(400, 300, 0.3, fade=True),
}

# Rising pitch as the countdown approaches "Begin" (count 0)
COUNTDOWN_TONES: Dict[int, ToneSpec] = {
    3: ToneSpec(400, 200, 0.4),
    2: ToneSpec(500, 200, 0.4),
    1: ToneSpec(600, 200, 0.4),
    0: ToneSpec(700, 300, 0.5),
}


def synthesize_tone(spec: ToneSpec, sample_rate: int = 16000) -> bytes:
    """Render a sine tone as mono PCM16LE bytes.

    A faded tone ramps up over the first 100 ms and back down to silence at
    the end, like a soft chime.
    """
    num_samples = int(sample_rate * spec.duration_ms / 1000)
    ramp_samples = int(sample_rate * 0.1)
    audio_data = bytearray()

    for i in range(num_samples):
        t = i / sample_rate
        gain = spec.volume
        if spec.fade:
            if i < ramp_samples:
                gain *= i / ramp_samples
            else:
                gain *= max(num_samples - i, 0) / max(num_samples - ramp_samples, 1)
        sample = int(32767 * gain * math.sin(2 * math.pi * spec.frequency * t))
        audio_data.extend(struct.pack('<h', sample))

    return bytes(audio_data)


class ToneCuePlayer(AudioCuePlayer):
    """
    Turns cues into outbound audio messages.

    Each tone is rendered once and cached. Voice cues cannot be
    synthesized server-side and are forwarded as text for the client's
    speech synthesis.
    """

    def __init__(self, emit: Callable[[OutboundMessage], None], sample_rate: int = 16000):
        self.emit = emit
        self.sample_rate = sample_rate
        self._cache: Dict[ToneSpec, bytes] = {}

    def play_cue(self, cue: AudioCue) -> None:
        if cue.kind == CueKind.COUNTER_VOICE:
            if cue.count is not None:
                self.emit(SpeakMessage(text=str(cue.count)))
            return

        spec = self._spec_for(cue)
        if spec is None:
            logger.warning(f"No tone configured for cue {cue.kind.value} ({cue.count})")
            return

        if spec not in self._cache:
            self._cache[spec] = synthesize_tone(spec, self.sample_rate)
        self.emit(AudioOutMessage(self._cache[spec]))

    def _spec_for(self, cue: AudioCue):
        if cue.kind == CueKind.COUNTDOWN:
            return COUNTDOWN_TONES.get(cue.count)
        return PHASE_TONES.get(cue.kind)
