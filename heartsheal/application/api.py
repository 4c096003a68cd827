"""FastAPI application entry point."""

import logging
from typing import Optional

from fastapi import FastAPI, WebSocket, Query, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .config import settings
from .controller import BreathingCoachController
from ..domain.entities import BreathingPattern, PatternCategory
from ..domain.interfaces.session_summary_repository import SessionSummaryRepository
from ..infrastructure.dynamodb_session_summary_repository import DynamoDBSessionSummaryRepository
from ..infrastructure.local_pattern_provider import LocalPatternProvider
from ..infrastructure.local_session_summary_repository import LocalSessionSummaryRepository
from ..infrastructure.logging_cue_player import LoggingCuePlayer
from ..infrastructure.tone_cue_player import ToneCuePlayer

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _build_summary_repository() -> SessionSummaryRepository:
    if settings.summary_store == "dynamodb":
        logger.info(f"Using DynamoDB table {settings.summaries_table_name} for session summaries")
        return DynamoDBSessionSummaryRepository(
            table_name=settings.summaries_table_name,
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            aws_session_token=settings.aws_session_token,
        )
    return LocalSessionSummaryRepository()


def _build_cue_player_factory():
    if settings.audio_output == "log":
        return lambda emit: LoggingCuePlayer()
    return lambda emit: ToneCuePlayer(emit, sample_rate=settings.audio_sample_rate_hz)


# Initialize providers
pattern_provider = LocalPatternProvider()
summary_repository = _build_summary_repository()

# Initialize controller with injected dependencies
controller = BreathingCoachController(
    pattern_provider=pattern_provider,
    summary_repository=summary_repository,
    cue_player_factory=_build_cue_player_factory(),
    countdown_start=settings.countdown_start,
    tick_interval=settings.tick_interval_ms / 1000,
    tick_step=settings.tick_step_seconds,
    default_total_cycles=settings.default_total_cycles,
    default_sound_enabled=settings.default_sound_enabled,
)


def _pattern_to_dict(pattern: BreathingPattern) -> dict:
    data = pattern.model_dump(mode="json")
    data["phase_sequence"] = [phase.value for phase in pattern.phase_sequence]
    data["cycle_seconds"] = pattern.cycle_seconds
    return data


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return controller.get_health_status()


@app.get("/patterns")
async def get_patterns(category: Optional[PatternCategory] = Query(None, description="Filter by category")):
    """List breathing patterns, optionally filtered by category."""
    patterns = controller.get_patterns(category)
    return {"patterns": [_pattern_to_dict(pattern) for pattern in patterns]}


@app.get("/patterns/{pattern_id}")
async def get_pattern(pattern_id: str):
    """Get a single breathing pattern."""
    try:
        return _pattern_to_dict(controller.get_pattern(pattern_id))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/summaries")
async def get_summaries():
    """List saved breathing sessions, most recent first."""
    try:
        summaries = await controller.get_summaries()
    except Exception as e:
        logger.error(f"Error listing summaries: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
    return {"summaries": [summary.model_dump(mode="json") for summary in summaries]}


@app.get("/summaries/{summary_id}")
async def get_summary(summary_id: str):
    """Get a saved breathing session."""
    try:
        summary = await controller.get_summary(summary_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return summary.model_dump(mode="json")


@app.delete("/summaries/{summary_id}")
async def delete_summary(summary_id: str):
    """Delete a saved breathing session."""
    try:
        await controller.delete_summary(summary_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"deleted": summary_id}


@app.delete("/summaries")
async def clear_summaries():
    """Delete all saved breathing sessions."""
    deleted = await controller.clear_summaries()
    return {"deleted": deleted}


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for guided breathing sessions.

    Connection lifecycle:
    1. Client connects and sends a session.create message
    2. Server streams the countdown, then phase/timer/counter events
    3. Client may pause, resume, toggle, reset, exit or start another session
    4. On session.completed the client may send summary.save with notes
    5. On disconnect, server cancels any running timers

    Cue audio is sent as binary frames (PCM16LE, mono, 16 kHz by default).
    """
    await websocket.accept()

    try:
        message = await websocket.receive_json()

        if message.get("type") != "session.create":
            logger.error(f"Expected session.create message, got {message.get('type')}")
            await websocket.send_json({
                "type": "error",
                "code": "INVALID_MESSAGE",
                "message": "First message must be session.create"
            })
            await websocket.close()
            return

        try:
            request = controller.parse_session_create(message)
        except ValidationError as e:
            logger.error(f"Invalid session.create message: {e}")
            await websocket.send_json({
                "type": "error",
                "code": "INVALID_MESSAGE",
                "message": "Invalid session.create message"
            })
            await websocket.close()
            return

        await controller.handle_websocket_connection(websocket=websocket, request=request)
    except Exception as e:
        logger.error(f"Error handling websocket connection: {e}", exc_info=True)
        try:
            await websocket.close()
        except Exception as close_error:
            logger.debug(f"WebSocket already closed: {close_error}")
