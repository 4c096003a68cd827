"""Shared fixtures for breathing coach tests."""

import pytest

from heartsheal.domain.entities.audio import AudioCue
from heartsheal.infrastructure.local_pattern_provider import LocalPatternProvider
from heartsheal.infrastructure.manual_scheduler import ManualScheduler


class RecordingCuePlayer:
    """Audio cue player that remembers every cue it was asked to play."""

    def __init__(self):
        self.cues: list[AudioCue] = []

    def play_cue(self, cue: AudioCue) -> None:
        self.cues.append(cue)

    @property
    def kinds(self):
        return [cue.kind for cue in self.cues]


class FailingCuePlayer:
    """Audio cue player whose synthesis is always unavailable."""

    def __init__(self):
        self.attempts = 0

    def play_cue(self, cue: AudioCue) -> None:
        self.attempts += 1
        raise RuntimeError("speech synthesis unavailable")


@pytest.fixture
def scheduler():
    """Create a manual scheduler with a virtual clock."""
    return ManualScheduler()


@pytest.fixture
def cue_player():
    """Create a recording cue player."""
    return RecordingCuePlayer()


@pytest.fixture
def failing_cue_player():
    """Create a cue player that raises on every cue."""
    return FailingCuePlayer()


@pytest.fixture
def pattern_provider():
    """Create the built-in pattern catalog."""
    return LocalPatternProvider()


@pytest.fixture
def messages():
    """Collect outbound messages emitted by services under test."""
    return []
