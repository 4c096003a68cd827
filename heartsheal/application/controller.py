"""Breathing Coach Controller for handling business logic and coordination."""

import logging
from typing import Optional

from fastapi import WebSocket

from ..domain.entities import (
    BreathingPattern,
    PatternCategory,
    SessionCreate,
    SessionSummary,
)
from ..domain.interfaces.pattern_provider import PatternProvider
from ..domain.interfaces.scheduler import Scheduler
from ..domain.interfaces.session_summary_repository import SessionSummaryRepository
from ..domain.services import BreathingService
from ..domain.services.breathing_service import CuePlayerFactory
from ..infrastructure.asyncio_scheduler import AsyncioScheduler
from .websocket_handler import WebSocketHandler

logger = logging.getLogger(__name__)


class BreathingCoachController:
    """
    Controller for coordinating breathing coach operations.

    This controller is injected with all necessary providers and handles
    the business logic for each endpoint, keeping the API layer thin.
    """

    def __init__(
        self,
        pattern_provider: PatternProvider,
        summary_repository: SessionSummaryRepository,
        cue_player_factory: Optional[CuePlayerFactory] = None,
        scheduler: Optional[Scheduler] = None,
        countdown_start: int = 3,
        tick_interval: float = 0.1,
        tick_step: float = 0.1,
        default_total_cycles: int = 3,
        default_sound_enabled: bool = True,
    ):
        """
        Initialize the controller with injected dependencies.

        Args:
            pattern_provider: Catalog of breathing patterns
            summary_repository: Repository for completed-session summaries
            cue_player_factory: Builds an audio cue player around a service's emit
            scheduler: Timer scheduler; defaults to the running asyncio loop
            countdown_start: First number shown by the pre-session countdown
            tick_interval: Seconds between controller ticks
            tick_step: Seconds removed from the phase clock per tick
            default_total_cycles: Cycle target when session.create omits one
            default_sound_enabled: Cue sound when session.create omits it
        """
        self.pattern_provider = pattern_provider
        self.summary_repository = summary_repository
        self.cue_player_factory = cue_player_factory
        self.scheduler = scheduler
        self.countdown_start = countdown_start
        self.tick_interval = tick_interval
        self.tick_step = tick_step
        self.session_defaults = {
            "total_cycles": default_total_cycles,
            "sound_enabled": default_sound_enabled,
        }
        self.active_services = 0

        logger.info("BreathingCoachController initialized with providers")

    def create_service(self) -> BreathingService:
        """Create a breathing service for one client connection."""
        return BreathingService(
            scheduler=self.scheduler or AsyncioScheduler(),
            summary_repository=self.summary_repository,
            cue_player_factory=self.cue_player_factory,
            countdown_start=self.countdown_start,
            tick_interval=self.tick_interval,
            tick_step=self.tick_step,
        )

    def parse_session_create(self, message: dict) -> SessionCreate:
        """
        Validate a session.create message, filling omitted fields from settings.

        Raises:
            ValidationError: If the message is invalid.
        """
        return SessionCreate.model_validate({**self.session_defaults, **message})

    async def handle_websocket_connection(self, websocket: WebSocket, request: SessionCreate) -> None:
        """Run a breathing service for an accepted websocket."""
        logger.info(f"Handling new WebSocket connection from {websocket.client}")

        service = self.create_service()
        handler = WebSocketHandler(
            breathing_service=service,
            pattern_provider=self.pattern_provider,
            session_defaults=self.session_defaults,
        )

        await service.start()
        self.active_services += 1
        try:
            handler.start_session(request)
            await handler.handle_websocket(websocket)
        finally:
            self.active_services -= 1
            if service.pending_summary is not None:
                logger.info(f"Service {service.id} closed with an unsaved summary")

    def get_patterns(self, category: Optional[PatternCategory] = None) -> list[BreathingPattern]:
        return self.pattern_provider.list_patterns(category)

    def get_pattern(self, pattern_id: str) -> BreathingPattern:
        """
        Raises:
            ValueError: If the pattern is not found.
        """
        return self.pattern_provider.get_pattern(pattern_id)

    async def get_summaries(self) -> list[SessionSummary]:
        return await self.summary_repository.list_summaries()

    async def get_summary(self, summary_id: str) -> SessionSummary:
        return await self.summary_repository.get_summary(summary_id)

    async def delete_summary(self, summary_id: str) -> None:
        await self.summary_repository.delete_summary(summary_id)

    async def clear_summaries(self) -> int:
        """Delete all stored breathing sessions; returns how many were removed."""
        summaries = await self.summary_repository.list_summaries()
        for summary in summaries:
            await self.summary_repository.delete_summary(str(summary.id))
        logger.info(f"Cleared {len(summaries)} breathing session summaries")
        return len(summaries)

    def get_health_status(self) -> dict:
        """
        Get application health status.

        Returns:
            Dict containing health status information
        """
        return {
            "status": "healthy",
            "active_sessions": self.active_services,
            "providers": {
                "pattern_provider": type(self.pattern_provider).__name__,
                "summary_repository": type(self.summary_repository).__name__,
            },
        }
