import asyncio
import json
import logging
from typing import Optional

from pydantic import ValidationError
from starlette.websockets import WebSocket, WebSocketDisconnect

from ..domain.entities import (
    CUSTOM_PATTERN_ID,
    AudioOutMessage,
    BreathingPattern,
    CountdownTickMessage,
    CounterTickMessage,
    CycleCompletedMessage,
    ErrorCode,
    ErrorOutMessage,
    NoticeMessage,
    OutboundMessage,
    PhaseChangedMessage,
    SessionCompletedMessage,
    SessionCreate,
    SessionExitedMessage,
    SessionResetMessage,
    SessionStartedMessage,
    SpeakMessage,
    StatusChangedMessage,
    SummarySave,
    SummarySavedMessage,
    TimerTickMessage,
)
from ..domain.interfaces.pattern_provider import PatternProvider
from ..domain.services import BreathingService

logger = logging.getLogger(__name__)


class WebSocketHandler:

    def __init__(
        self,
        breathing_service: BreathingService,
        pattern_provider: PatternProvider,
        session_defaults: Optional[dict] = None,
    ):
        self._breathing_service = breathing_service
        self._pattern_provider = pattern_provider
        self._session_defaults = session_defaults or {}

    def start_session(self, request: SessionCreate) -> bool:
        """Resolve the requested pattern and start its countdown."""
        if request.pattern_id == CUSTOM_PATTERN_ID:
            pattern = BreathingPattern.custom(request.custom_durations)
        else:
            try:
                pattern = self._pattern_provider.get_pattern(request.pattern_id)
            except ValueError as e:
                logger.warning(f"Session requested unknown pattern: {e}")
                self._breathing_service.emit(ErrorOutMessage(ErrorCode.PATTERN_NOT_FOUND, str(e)))
                return False

        self._breathing_service.select_pattern(
            pattern,
            total_cycles=request.total_cycles,
            custom_durations=request.custom_durations,
            sound_enabled=request.sound_enabled,
            counter=request.counter,
        )
        return True

    async def handle_websocket(self, websocket: WebSocket) -> None:
        # Note: websocket.accept() is called by the API endpoint before this
        send_task = asyncio.create_task(self._send_loop(websocket))
        receive_task = asyncio.create_task(self._receive_loop(websocket))
        done, pending = await asyncio.wait(
            {send_task, receive_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
        try:
            for task in done:
                exc = task.exception()
                if exc:
                    raise exc
        except WebSocketDisconnect:
            logger.info(f"WebSocket disconnected: {websocket.client}")
        except Exception as e:
            logger.error(f"WebSocket error: {e}", exc_info=True)
        finally:
            await self._breathing_service.stop()
            for t in (send_task, receive_task):
                if not t.done():
                    t.cancel()
            await asyncio.gather(send_task, receive_task, return_exceptions=True)

            try:
                await websocket.close()
            except Exception as e:
                logger.debug(f"WebSocket already closed: {e}")
            logger.info(f"WebSocket connection closed: {websocket.client}")

    async def _send_loop(self, websocket: WebSocket) -> None:
        while self._breathing_service._running:
            item: OutboundMessage = await self._breathing_service.outbound_queue.get()
            logger.debug(f"_send_loop got message: {type(item).__name__}")

            if isinstance(item, AudioOutMessage):
                # Cue audio goes out as a binary frame
                await websocket.send_bytes(item.pcm_bytes)
                continue

            await websocket.send_text(json.dumps(self._serialize(item)))

    def _serialize(self, item: OutboundMessage) -> dict:
        match item:
            case CountdownTickMessage():
                return {"type": "countdown.tick", "count": item.count}

            case SessionStartedMessage():
                return {
                    "type": "session.started",
                    "session_id": item.session_id,
                    "pattern_id": item.pattern_id,
                    "pattern_name": item.pattern_name,
                    "phase": item.phase.value,
                    "time_left": item.time_left,
                    "total_cycles": item.total_cycles,
                }

            case PhaseChangedMessage():
                return {
                    "type": "phase.changed",
                    "phase": item.phase.value,
                    "duration": item.duration,
                    "cycles_completed": item.cycles_completed,
                }

            case TimerTickMessage():
                return {"type": "timer.tick", "phase": item.phase.value, "time_left": item.time_left}

            case CounterTickMessage():
                return {"type": "counter.tick", "phase": item.phase.value, "count": item.count}

            case CycleCompletedMessage():
                return {
                    "type": "cycle.completed",
                    "cycles_completed": item.cycles_completed,
                    "total_cycles": item.total_cycles,
                }

            case SessionCompletedMessage():
                return {
                    "type": "session.completed",
                    "summary": item.summary.model_dump(mode="json"),
                    "formatted_duration": item.summary.formatted_duration,
                }

            case StatusChangedMessage():
                return {"type": "session.status", "status": item.status.value, "time_left": item.time_left}

            case SessionResetMessage():
                return {"type": "session.reset", "phase": item.phase.value, "time_left": item.time_left}

            case SessionExitedMessage():
                return {"type": "session.exited", "reason": item.reason}

            case SpeakMessage():
                return {"type": "speak", "text": item.text}

            case SummarySavedMessage():
                return {"type": "summary.saved", "summary": item.summary.model_dump(mode="json")}

            case NoticeMessage():
                return json.loads(item.notice.model_dump_json())

            case ErrorOutMessage():
                return json.loads(item.error.model_dump_json())

            case _:
                raise ValueError(f"Unknown OutboundMessage type: {type(item)}")

    async def _receive_loop(self, websocket: WebSocket) -> None:
        """Receive control messages from the client and forward them to the service."""
        while True:
            data = await websocket.receive()

            if data.get("type") == "websocket.disconnect":
                logger.info(f"Client disconnected: {data}")
                self._breathing_service.exit_session()
                break

            if data.get("type") == "websocket.receive" and data.get("text") is not None:
                try:
                    message = json.loads(data["text"])
                except json.JSONDecodeError as e:
                    logger.error(f"Invalid JSON message: {e}")
                    self._breathing_service.emit(
                        ErrorOutMessage(ErrorCode.INVALID_MESSAGE, "Messages must be JSON")
                    )
                    continue
                await self._handle_control_message(message)

    async def _handle_control_message(self, message: dict) -> None:
        """Handle JSON control messages from client."""
        msg_type = message.get("type")
        service = self._breathing_service

        try:
            if msg_type == "session.create":
                self.start_session(SessionCreate.model_validate({**self._session_defaults, **message}))
            elif msg_type == "session.pause":
                service.pause()
            elif msg_type == "session.resume":
                service.resume()
            elif msg_type == "session.toggle":
                service.toggle()
            elif msg_type == "session.reset":
                service.reset()
            elif msg_type == "session.exit":
                service.exit_session()
            elif msg_type == "summary.save":
                request = SummarySave.model_validate(message)
                await service.save_summary(request.notes)
            else:
                logger.warning(f"Unknown control message type: {msg_type}")
                service.emit(ErrorOutMessage(ErrorCode.INVALID_MESSAGE, f"Unknown message type: {msg_type}"))
        except ValidationError as e:
            logger.warning(f"Invalid {msg_type} message: {e}")
            service.emit(ErrorOutMessage(ErrorCode.INVALID_MESSAGE, f"Invalid {msg_type} message"))
