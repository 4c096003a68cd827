"""Domain services for the breathing coach."""

from .breathing_controller import BreathingSessionController
from .breathing_service import BreathingService
from .countdown import BreathingCountdown
from .counter_scheduler import CounterScheduler

__all__ = [
    "BreathingCountdown",
    "BreathingService",
    "BreathingSessionController",
    "CounterScheduler",
]
