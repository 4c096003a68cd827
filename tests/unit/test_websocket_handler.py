"""Tests for WebSocketHandler message dispatch and serialization."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from heartsheal.application.websocket_handler import WebSocketHandler
from heartsheal.domain.entities import (
    BreathingPhase,
    CounterSoundType,
    CountdownTickMessage,
    ErrorCode,
    ErrorOutMessage,
    NoticeMessage,
    PhaseChangedMessage,
    SessionCompletedMessage,
    SessionCreate,
    SessionExitedMessage,
    SessionStatus,
    SessionSummary,
    SpeakMessage,
    StatusChangedMessage,
)


@pytest.fixture
def mock_service():
    """Create a mock breathing service."""
    service = MagicMock()
    service.save_summary = AsyncMock()
    return service


@pytest.fixture
def handler(mock_service, pattern_provider):
    return WebSocketHandler(breathing_service=mock_service, pattern_provider=pattern_provider)


def test_start_session_selects_catalog_pattern(handler, mock_service):
    request = SessionCreate(pattern_id="478", total_cycles=4, counter={"enabled": True, "sound": "voice"})

    assert handler.start_session(request) is True

    pattern = mock_service.select_pattern.call_args.args[0]
    kwargs = mock_service.select_pattern.call_args.kwargs
    assert pattern.id == "478"
    assert kwargs["total_cycles"] == 4
    assert kwargs["sound_enabled"] is True
    assert kwargs["counter"].sound == CounterSoundType.VOICE


def test_start_session_builds_custom_pattern(handler, mock_service):
    request = SessionCreate(
        pattern_id="custom",
        custom_durations={"inhale": 5, "hold1": 0, "exhale": 7, "hold2": 0},
    )

    handler.start_session(request)

    pattern = mock_service.select_pattern.call_args.args[0]
    assert pattern.id == "custom"
    assert pattern.inhale == 5
    assert pattern.phase_sequence == [BreathingPhase.INHALE, BreathingPhase.EXHALE]


def test_start_session_unknown_pattern(handler, mock_service):
    assert handler.start_session(SessionCreate(pattern_id="missing")) is False

    mock_service.select_pattern.assert_not_called()
    error = mock_service.emit.call_args.args[0]
    assert isinstance(error, ErrorOutMessage)
    assert error.code == ErrorCode.PATTERN_NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message_type, method",
    [
        ("session.pause", "pause"),
        ("session.resume", "resume"),
        ("session.toggle", "toggle"),
        ("session.reset", "reset"),
        ("session.exit", "exit_session"),
    ],
)
async def test_control_messages_dispatch(handler, mock_service, message_type, method):
    await handler._handle_control_message({"type": message_type})

    getattr(mock_service, method).assert_called_once()


@pytest.mark.asyncio
async def test_summary_save_forwards_notes(handler, mock_service):
    await handler._handle_control_message({"type": "summary.save", "notes": "Slept well"})

    mock_service.save_summary.assert_awaited_once_with("Slept well")


@pytest.mark.asyncio
async def test_invalid_summary_save(handler, mock_service):
    await handler._handle_control_message({"type": "summary.save", "notes": "x" * 2001})

    mock_service.save_summary.assert_not_called()
    error = mock_service.emit.call_args.args[0]
    assert error.code == ErrorCode.INVALID_MESSAGE
    assert error.message == "Invalid summary.save message"


@pytest.mark.asyncio
async def test_unknown_message_type(handler, mock_service):
    await handler._handle_control_message({"type": "session.rewind"})

    error = mock_service.emit.call_args.args[0]
    assert error.message == "Unknown message type: session.rewind"


def test_serialize_messages(handler):
    assert handler._serialize(CountdownTickMessage(count=0)) == {"type": "countdown.tick", "count": 0}
    assert handler._serialize(PhaseChangedMessage(BreathingPhase.HOLD1, 7, 0)) == {
        "type": "phase.changed",
        "phase": "hold1",
        "duration": 7,
        "cycles_completed": 0,
    }
    assert handler._serialize(StatusChangedMessage(SessionStatus.PAUSED, 1.7)) == {
        "type": "session.status",
        "status": "paused",
        "time_left": 1.7,
    }
    assert handler._serialize(SessionExitedMessage()) == {"type": "session.exited", "reason": "exit"}
    assert handler._serialize(SpeakMessage("4")) == {"type": "speak", "text": "4"}
    assert handler._serialize(NoticeMessage("Your session could not be saved")) == {
        "type": "server_notice",
        "message": "Your session could not be saved",
    }
    assert handler._serialize(ErrorOutMessage(ErrorCode.NOTHING_TO_SAVE, "No completed session to save")) == {
        "type": "error",
        "code": "NOTHING_TO_SAVE",
        "message": "No completed session to save",
    }


def test_serialize_completed_session(handler):
    summary = SessionSummary(pattern_id="box", pattern_name="Box Breathing", duration_seconds=75, cycles_completed=3)

    data = handler._serialize(SessionCompletedMessage(summary=summary))

    assert data["type"] == "session.completed"
    assert data["formatted_duration"] == "1:15"
    assert data["summary"]["id"] == str(summary.id)
    assert data["summary"]["notes"] is None


def test_serialize_unknown_message(handler):
    with pytest.raises(ValueError, match="Unknown OutboundMessage type"):
        handler._serialize(object())


@pytest.mark.asyncio
async def test_session_create_uses_defaults(mock_service, pattern_provider):
    handler = WebSocketHandler(
        breathing_service=mock_service,
        pattern_provider=pattern_provider,
        session_defaults={"total_cycles": 5, "sound_enabled": False},
    )

    await handler._handle_control_message({"type": "session.create", "pattern_id": "box"})

    kwargs = mock_service.select_pattern.call_args.kwargs
    assert kwargs["total_cycles"] == 5
    assert kwargs["sound_enabled"] is False


@pytest.mark.asyncio
async def test_session_create_overrides_defaults(mock_service, pattern_provider):
    handler = WebSocketHandler(
        breathing_service=mock_service,
        pattern_provider=pattern_provider,
        session_defaults={"total_cycles": 5, "sound_enabled": False},
    )

    await handler._handle_control_message({"type": "session.create", "pattern_id": "box", "total_cycles": 2})

    assert mock_service.select_pattern.call_args.kwargs["total_cycles"] == 2
