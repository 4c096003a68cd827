"""Tests for application settings."""

from heartsheal.application.config import Settings
from heartsheal.application.controller import BreathingCoachController
from heartsheal.infrastructure.local_session_summary_repository import LocalSessionSummaryRepository


def test_defaults(monkeypatch):
    """Test the default breathing timer and storage settings."""
    monkeypatch.delenv("SUMMARY_STORE", raising=False)
    monkeypatch.delenv("TICK_INTERVAL_MS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.app_name == "heartsheal-breathing"
    assert settings.tick_interval_ms == 100
    assert settings.tick_step_seconds == 0.1
    assert settings.countdown_start == 3
    assert settings.default_total_cycles == 3
    assert settings.default_sound_enabled is True
    assert settings.audio_output == "tones"
    assert settings.summary_store == "local"
    assert settings.summaries_table_name == "BreathingSessions"
    assert settings.aws_access_key_id is None


def test_environment_overrides(monkeypatch):
    """Test that environment variables override defaults case-insensitively."""
    monkeypatch.setenv("SUMMARY_STORE", "dynamodb")
    monkeypatch.setenv("tick_interval_ms", "250")
    monkeypatch.setenv("AUDIO_OUTPUT", "log")

    settings = Settings(_env_file=None)

    assert settings.summary_store == "dynamodb"
    assert settings.tick_interval_ms == 250
    assert settings.audio_output == "log"


def test_controller_fills_session_defaults(pattern_provider):
    controller = BreathingCoachController(
        pattern_provider=pattern_provider,
        summary_repository=LocalSessionSummaryRepository(),
        default_total_cycles=6,
        default_sound_enabled=False,
    )

    request = controller.parse_session_create({"type": "session.create", "pattern_id": "coherent"})

    assert request.total_cycles == 6
    assert request.sound_enabled is False
    assert request.counter.enabled is False
