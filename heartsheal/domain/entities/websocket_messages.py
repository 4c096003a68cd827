"""WebSocket message models for the breathing coach."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .breathing_pattern import CustomDurations
from .counter import CounterSettings


# ===== Client → Server Messages =====


class SessionCreate(BaseModel):
    """Pattern selection message from client; starts the countdown."""

    type: Literal["session.create"] = "session.create"
    pattern_id: str
    total_cycles: int = Field(default=3, ge=1, le=10)
    custom_durations: Optional[CustomDurations] = None
    sound_enabled: bool = True
    counter: CounterSettings = Field(default_factory=CounterSettings)


class SummarySave(BaseModel):
    """Request to persist the last completed session."""

    type: Literal["summary.save"] = "summary.save"
    notes: Optional[str] = Field(default=None, max_length=2000)


# ===== Server → Client Messages =====


class ServerNotice(BaseModel):
    """Server notice message."""

    type: Literal["server_notice"] = "server_notice"
    message: str


class ErrorCode(str, Enum):
    """Error codes for WebSocket errors."""

    INVALID_MESSAGE = "INVALID_MESSAGE"
    PATTERN_NOT_FOUND = "PATTERN_NOT_FOUND"
    NOTHING_TO_SAVE = "NOTHING_TO_SAVE"


class ErrorMessage(BaseModel):
    """Error message from server."""

    type: Literal["error"] = "error"
    code: ErrorCode
    message: str
