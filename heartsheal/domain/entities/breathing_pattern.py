"""Breathing pattern entities for the breathing coach."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


CUSTOM_PATTERN_ID = "custom"


class BreathingPhase(str, Enum):
    """Phases a breathing session can be in."""
    INHALE = "inhale"
    HOLD1 = "hold1"
    EXHALE = "exhale"
    HOLD2 = "hold2"
    LEFT_NOSTRIL = "leftNostril"
    RIGHT_NOSTRIL = "rightNostril"


class PatternCategory(str, Enum):
    """Difficulty category of a pattern."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class AnimationType(str, Enum):
    """Animation hint for the client."""
    CIRCLE = "circle"
    WAVE = "wave"
    NOSTRIL = "nostril"


class PhaseStyle(str, Enum):
    """How a pattern's durations map onto phases."""
    STANDARD = "standard"
    ALTERNATE_NOSTRIL = "alternate_nostril"


class CustomDurations(BaseModel):
    """User-adjusted durations for the custom pattern."""

    inhale: int = Field(default=4, ge=1, le=10)
    hold1: int = Field(default=4, ge=0, le=10)
    exhale: int = Field(default=4, ge=1, le=10)
    hold2: int = Field(default=4, ge=0, le=10)


class BreathingPattern(BaseModel):
    """Immutable template describing one breathing exercise.

    Hold durations are optional. A hold that is absent or zero is skipped
    entirely, so no zero-length phase is ever entered.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    instructions: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    color: str = ""
    category: PatternCategory = PatternCategory.BEGINNER
    animation_type: AnimationType = AnimationType.CIRCLE
    phase_style: PhaseStyle = PhaseStyle.STANDARD

    inhale: float = Field(gt=0, description="Inhale seconds (also the per-nostril duration)")
    hold1: Optional[float] = Field(default=None, ge=0, description="Hold after inhale, seconds")
    exhale: float = Field(gt=0, description="Exhale seconds")
    hold2: Optional[float] = Field(default=None, ge=0, description="Hold after exhale, seconds")

    class Config:
        """Pydantic model configuration."""

        frozen = True
        json_schema_extra = {
            "example": {
                "id": "box",
                "name": "Box Breathing",
                "category": "beginner",
                "animation_type": "circle",
                "inhale": 4,
                "hold1": 4,
                "exhale": 4,
                "hold2": 4,
            }
        }

    @property
    def is_alternate_nostril(self) -> bool:
        return self.phase_style == PhaseStyle.ALTERNATE_NOSTRIL

    @property
    def phase_sequence(self) -> list[BreathingPhase]:
        """Ordered phases making up one cycle of this pattern."""
        if self.is_alternate_nostril:
            return [BreathingPhase.LEFT_NOSTRIL, BreathingPhase.RIGHT_NOSTRIL]

        sequence = [BreathingPhase.INHALE]
        if self.hold1:
            sequence.append(BreathingPhase.HOLD1)
        sequence.append(BreathingPhase.EXHALE)
        if self.hold2:
            sequence.append(BreathingPhase.HOLD2)
        return sequence

    @property
    def initial_phase(self) -> BreathingPhase:
        return self.phase_sequence[0]

    @property
    def cycle_closing_phase(self) -> BreathingPhase:
        """The phase whose exit completes a cycle."""
        return self.phase_sequence[-1]

    def closes_cycle(self, phase: BreathingPhase) -> bool:
        return phase == self.cycle_closing_phase

    def next_phase(self, phase: BreathingPhase) -> BreathingPhase:
        """Phase entered after ``phase`` elapses.

        Raises:
            ValueError: If ``phase`` is not part of this pattern.
        """
        sequence = self.phase_sequence
        if phase not in sequence:
            raise ValueError(f"Phase {phase.value} is not part of pattern {self.id}")
        return sequence[(sequence.index(phase) + 1) % len(sequence)]

    def duration_for(self, phase: BreathingPhase) -> float:
        """Full duration of ``phase`` in seconds (0 for a skipped hold)."""
        if phase in (BreathingPhase.INHALE, BreathingPhase.LEFT_NOSTRIL, BreathingPhase.RIGHT_NOSTRIL):
            return self.inhale
        if phase == BreathingPhase.HOLD1:
            return self.hold1 or 0
        if phase == BreathingPhase.EXHALE:
            return self.exhale
        return self.hold2 or 0

    @property
    def cycle_seconds(self) -> float:
        return sum(self.duration_for(phase) for phase in self.phase_sequence)

    def with_custom_durations(self, durations: Optional[CustomDurations]) -> "BreathingPattern":
        """Session-start snapshot of this pattern.

        Only the synthetic custom pattern takes user durations; every other
        pattern is returned unchanged.
        """
        if self.id != CUSTOM_PATTERN_ID or durations is None:
            return self
        return self.model_copy(update={
            "inhale": durations.inhale,
            "hold1": durations.hold1 or None,
            "exhale": durations.exhale,
            "hold2": durations.hold2 or None,
        })

    @classmethod
    def custom(cls, durations: Optional[CustomDurations] = None) -> "BreathingPattern":
        """Build the personalised pattern from slider durations."""
        durations = durations or CustomDurations()
        instructions = ["Follow your custom breathing pattern", f"Inhale for {durations.inhale} seconds"]
        if durations.hold1 > 0:
            instructions.append(f"Hold for {durations.hold1} seconds")
        instructions.append(f"Exhale for {durations.exhale} seconds")
        if durations.hold2 > 0:
            instructions.append(f"Hold for {durations.hold2} seconds")
        instructions.append("Repeat the cycle")

        return cls(
            id=CUSTOM_PATTERN_ID,
            name="Custom Breathing",
            description="Your personalized breathing pattern",
            instructions=instructions,
            benefits=[
                "Personalized to your needs",
                "Adaptable to your comfort level",
                "Customizable for specific health needs",
            ],
            color="from-indigo-300 to-indigo-500",
            category=PatternCategory.BEGINNER,
            animation_type=AnimationType.CIRCLE,
            inhale=durations.inhale,
            hold1=durations.hold1 or None,
            exhale=durations.exhale,
            hold2=durations.hold2 or None,
        )
