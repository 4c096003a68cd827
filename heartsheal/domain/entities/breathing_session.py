"""Session entities for the breathing coach."""
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .breathing_pattern import BreathingPattern, BreathingPhase


class SessionStatus(str, Enum):
    """Session status enum."""
    READY = "ready"
    COUNTDOWN = "countdown"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class BreathingSession(BaseModel):
    """Mutable state of one breathing session."""

    id: UUID = Field(default_factory=uuid.uuid4)
    pattern: BreathingPattern
    phase: BreathingPhase
    time_left: float = Field(ge=0)
    cycles_completed: int = Field(default=0, ge=0)
    total_cycles: int = Field(default=3, ge=1, le=10)
    status: SessionStatus = SessionStatus.READY
    current_count: int = Field(default=0, ge=0)
    started_at: Optional[datetime] = None

    class Config:
        """Pydantic model configuration."""

        json_schema_extra = {
            "example": {
                "id": "12345678-1234-5678-1234-567812345678",
                "phase": "inhale",
                "time_left": 3.4,
                "cycles_completed": 1,
                "total_cycles": 3,
                "status": "active",
            }
        }

    @classmethod
    def for_pattern(cls, pattern: BreathingPattern, total_cycles: int = 3) -> "BreathingSession":
        """Create a session positioned at the pattern's initial phase."""
        return cls(
            pattern=pattern,
            phase=pattern.initial_phase,
            time_left=pattern.duration_for(pattern.initial_phase),
            total_cycles=total_cycles,
        )

    @property
    def is_running(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def phase_duration(self) -> float:
        return self.pattern.duration_for(self.phase)
