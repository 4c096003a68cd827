"""Completed-session record."""
import uuid
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class SessionSummary(BaseModel):
    """Summary of a finished breathing session, handed to the completion view."""

    id: UUID = Field(default_factory=uuid.uuid4)
    pattern_id: str
    pattern_name: str
    duration_seconds: int = Field(ge=0)
    cycles_completed: int = Field(ge=1)
    completed_at: datetime = Field(default_factory=datetime.utcnow)
    notes: Optional[str] = Field(default=None, max_length=2000)

    class Config:
        """Pydantic model configuration."""

        json_schema_extra = {
            "example": {
                "pattern_id": "box",
                "pattern_name": "Box Breathing",
                "duration_seconds": 52,
                "cycles_completed": 3,
                "notes": "Felt calmer afterwards",
            }
        }

    @property
    def formatted_duration(self) -> str:
        """Duration as ``m:ss``."""
        minutes, seconds = divmod(self.duration_seconds, 60)
        return f"{minutes}:{seconds:02d}"
