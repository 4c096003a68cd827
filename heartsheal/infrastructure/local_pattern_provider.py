"""Local in-memory implementation of PatternProvider."""

from typing import Dict, Optional

from ..domain.entities.breathing_pattern import (
    AnimationType,
    BreathingPattern,
    PatternCategory,
    PhaseStyle,
)
from ..domain.interfaces.pattern_provider import PatternProvider


class LocalPatternProvider(PatternProvider):
    """Local implementation of the PatternProvider protocol.

    Holds the built-in breathing patterns in a dictionary, in display order.
    """

    def __init__(self):
        """Initialize the provider with the built-in catalog."""
        self._patterns: Dict[str, BreathingPattern] = {}

        self.add_pattern(BreathingPattern(
            id="box",
            name="Box Breathing",
            description="Equal duration for all phases. Great for focus and calm.",
            instructions=[
                "Sit comfortably with your back straight",
                "Inhale slowly through your nose for 4 seconds",
                "Hold your breath for 4 seconds",
                "Exhale slowly through your mouth for 4 seconds",
                "Hold your breath for 4 seconds",
                "Repeat the cycle",
            ],
            benefits=["Reduces stress and anxiety", "Improves concentration", "Regulates the autonomic nervous system"],
            color="from-blue-300 to-blue-500",
            category=PatternCategory.BEGINNER,
            animation_type=AnimationType.CIRCLE,
            inhale=4,
            hold1=4,
            exhale=4,
            hold2=4,
        ))
        self.add_pattern(BreathingPattern(
            id="478",
            name="4-7-8 Breathing",
            description="Inhale for 4, hold for 7, exhale for 8. Helps reduce anxiety and aids sleep.",
            instructions=[
                "Sit with your back straight",
                "Place the tip of your tongue against the ridge behind your upper front teeth",
                "Exhale completely through your mouth, making a whoosh sound",
                "Close your mouth and inhale quietly through your nose for 4 seconds",
                "Hold your breath for 7 seconds",
                "Exhale completely through your mouth for 8 seconds",
                "Repeat the cycle",
            ],
            benefits=["Helps with insomnia", "Reduces anxiety", "Manages cravings", "Controls emotional responses"],
            color="from-purple-300 to-purple-500",
            category=PatternCategory.INTERMEDIATE,
            animation_type=AnimationType.WAVE,
            inhale=4,
            hold1=7,
            exhale=8,
        ))
        self.add_pattern(BreathingPattern(
            id="relaxation",
            name="Relaxation Breathing",
            description="Slow inhale and longer exhale to activate the parasympathetic nervous system.",
            instructions=[
                "Find a comfortable position",
                "Inhale slowly through your nose for 4 seconds",
                "Exhale slowly through your mouth for 6 seconds",
                "Focus on the sensation of your breath",
                "Repeat the cycle",
            ],
            benefits=["Activates the relaxation response", "Lowers heart rate and blood pressure", "Reduces muscle tension"],
            color="from-pink-300 to-pink-500",
            category=PatternCategory.BEGINNER,
            animation_type=AnimationType.WAVE,
            inhale=4,
            exhale=6,
        ))
        self.add_pattern(BreathingPattern(
            id="alternate-nostril",
            name="Alternate Nostril",
            description="Traditional yogic breathing technique that balances the hemispheres of the brain.",
            instructions=[
                "Sit comfortably with your back straight",
                "Use your right thumb to close your right nostril",
                "Inhale slowly through your left nostril",
                "Close your left nostril with your ring finger",
                "Open your right nostril and exhale",
                "Inhale through your right nostril",
                "Close your right nostril and exhale through your left",
                "Repeat the cycle",
            ],
            benefits=[
                "Balances the left and right hemispheres of the brain",
                "Improves focus and concentration",
                "Purifies the subtle energy channels",
                "Reduces stress and anxiety",
            ],
            color="from-green-300 to-green-500",
            category=PatternCategory.ADVANCED,
            animation_type=AnimationType.NOSTRIL,
            phase_style=PhaseStyle.ALTERNATE_NOSTRIL,
            inhale=4,
            exhale=4,
        ))
        self.add_pattern(BreathingPattern(
            id="coherent",
            name="Coherent Breathing",
            description="Equal inhale and exhale at a rate of 5 breaths per minute.",
            instructions=[
                "Sit or lie down comfortably",
                "Breathe in slowly through your nose for 6 seconds",
                "Breathe out slowly through your nose for 6 seconds",
                "Continue this pattern without holding your breath",
                "Focus on smooth, continuous breathing",
            ],
            benefits=[
                "Optimizes heart rate variability",
                "Reduces stress and anxiety",
                "Improves emotional regulation",
                "Enhances cognitive function",
            ],
            color="from-yellow-300 to-yellow-500",
            category=PatternCategory.INTERMEDIATE,
            animation_type=AnimationType.WAVE,
            inhale=6,
            exhale=6,
        ))
        self.add_pattern(BreathingPattern(
            id="diaphragmatic",
            name="Diaphragmatic Breathing",
            description="Deep belly breathing that fully engages the diaphragm.",
            instructions=[
                "Lie on your back with knees bent or sit comfortably",
                "Place one hand on your chest and the other on your abdomen",
                "Breathe in slowly through your nose, feeling your abdomen rise",
                "Exhale slowly through pursed lips, feeling your abdomen fall",
                "The hand on your chest should remain relatively still",
            ],
            benefits=[
                "Strengthens the diaphragm",
                "Decreases oxygen demand",
                "Slows breathing rate",
                "Reduces blood pressure",
            ],
            color="from-teal-300 to-teal-500",
            category=PatternCategory.BEGINNER,
            animation_type=AnimationType.CIRCLE,
            inhale=4,
            exhale=6,
        ))

    def get_pattern(self, pattern_id: str) -> BreathingPattern:
        """Retrieve a pattern by ID from the in-memory dictionary.

        Args:
            pattern_id: The unique identifier of the pattern.

        Returns:
            BreathingPattern: The pattern entity.

        Raises:
            ValueError: If the pattern is not found.
        """
        if pattern_id not in self._patterns:
            raise ValueError(f"Pattern with id {pattern_id} not found")

        return self._patterns[pattern_id]

    def list_patterns(self, category: Optional[PatternCategory] = None) -> list[BreathingPattern]:
        """List patterns in catalog order, optionally filtered by category."""
        patterns = list(self._patterns.values())
        if category is None:
            return patterns
        return [pattern for pattern in patterns if pattern.category == category]

    def add_pattern(self, pattern: BreathingPattern) -> None:
        """Add or replace a pattern in the catalog."""
        self._patterns[pattern.id] = pattern
