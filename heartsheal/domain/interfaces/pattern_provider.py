"""Breathing pattern provider protocol."""

from typing import Optional, Protocol, runtime_checkable

from ..entities.breathing_pattern import BreathingPattern, PatternCategory


@runtime_checkable
class PatternProvider(Protocol):
    """Protocol for breathing pattern catalogs."""

    def get_pattern(self, pattern_id: str) -> BreathingPattern:
        """Retrieve a pattern by ID.

        Args:
            pattern_id: The unique identifier of the pattern.

        Returns:
            BreathingPattern: The pattern entity.

        Raises:
            ValueError: If the pattern is not found.
        """
        ...

    def list_patterns(self, category: Optional[PatternCategory] = None) -> list[BreathingPattern]:
        """List patterns, optionally filtered by category."""
        ...
