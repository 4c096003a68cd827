"""Infrastructure layer components."""

from .asyncio_scheduler import AsyncioScheduler
from .dynamodb_session_summary_repository import DynamoDBSessionSummaryRepository
from .local_pattern_provider import LocalPatternProvider
from .local_session_summary_repository import LocalSessionSummaryRepository
from .logging_cue_player import LoggingCuePlayer
from .manual_scheduler import ManualScheduler
from .tone_cue_player import ToneCuePlayer

__all__ = [
    "AsyncioScheduler",
    "DynamoDBSessionSummaryRepository",
    "LocalPatternProvider",
    "LocalSessionSummaryRepository",
    "LoggingCuePlayer",
    "ManualScheduler",
    "ToneCuePlayer",
]
