"""Test that infrastructure implementations conform to the domain protocols."""

from heartsheal.domain.entities import AudioCue, CueKind
from heartsheal.domain.interfaces.audio_cue_player import AudioCuePlayer
from heartsheal.domain.interfaces.pattern_provider import PatternProvider
from heartsheal.domain.interfaces.scheduler import Scheduler
from heartsheal.infrastructure.asyncio_scheduler import AsyncioScheduler
from heartsheal.infrastructure.local_pattern_provider import LocalPatternProvider
from heartsheal.infrastructure.logging_cue_player import LoggingCuePlayer
from heartsheal.infrastructure.manual_scheduler import ManualScheduler
from heartsheal.infrastructure.tone_cue_player import ToneCuePlayer


def test_local_pattern_provider_implements_protocol():
    """Test that LocalPatternProvider implements PatternProvider protocol."""
    provider = LocalPatternProvider()

    assert isinstance(provider, PatternProvider)
    assert callable(getattr(provider, 'get_pattern'))
    assert callable(getattr(provider, 'list_patterns'))


def test_schedulers_implement_protocol():
    """Test that both schedulers can be used interchangeably."""
    assert isinstance(ManualScheduler(), Scheduler)
    assert isinstance(AsyncioScheduler(), Scheduler)


def test_cue_players_implement_protocol():
    """Test that both cue players implement AudioCuePlayer protocol."""
    assert isinstance(LoggingCuePlayer(), AudioCuePlayer)
    assert isinstance(ToneCuePlayer(emit=lambda message: None), AudioCuePlayer)


def test_logging_cue_player_logs_cues(caplog):
    """Test that the logging player records the cue kind and count."""
    player: AudioCuePlayer = LoggingCuePlayer()

    with caplog.at_level("INFO"):
        player.play_cue(AudioCue(CueKind.INHALE))
        player.play_cue(AudioCue(CueKind.COUNTER_VOICE, 3))

    assert "Cue: inhale-cue" in caplog.text
    assert "Cue: counter-voice (3)" in caplog.text
