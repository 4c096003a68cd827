"""Local in-memory implementation of Session Summary Repository."""

from typing import Dict

from ..domain.entities.session_summary import SessionSummary
from ..domain.interfaces.session_summary_repository import SessionSummaryRepository


class LocalSessionSummaryRepository(SessionSummaryRepository):
    """Local in-memory implementation of the Session Summary Repository.

    Stores summaries in a dictionary for testing and development purposes.
    """

    def __init__(self):
        """Initialize the local summary repository with an empty dictionary."""
        self._summaries: Dict[str, SessionSummary] = {}

    async def save_summary(self, summary: SessionSummary) -> None:
        """Save a summary to the in-memory dictionary.

        Args:
            summary: The summary entity to save.
        """
        self._summaries[str(summary.id)] = summary

    async def get_summary(self, summary_id: str) -> SessionSummary:
        """Retrieve a summary by ID from the in-memory dictionary.

        Args:
            summary_id: The unique identifier of the summary.

        Returns:
            SessionSummary: The summary entity.

        Raises:
            ValueError: If the summary is not found.
        """
        if summary_id not in self._summaries:
            raise ValueError(f"Summary with id {summary_id} not found")

        return self._summaries[summary_id]

    async def list_summaries(self) -> list[SessionSummary]:
        """List all summaries, most recent first."""
        return sorted(self._summaries.values(), key=lambda s: s.completed_at, reverse=True)

    async def delete_summary(self, summary_id: str) -> None:
        """Delete a summary from the in-memory dictionary.

        Args:
            summary_id: The unique identifier of the summary to delete.

        Raises:
            ValueError: If the summary is not found.
        """
        if summary_id not in self._summaries:
            raise ValueError(f"Summary with id {summary_id} not found")

        del self._summaries[summary_id]

    def clear(self) -> None:
        """Clear all stored breathing data."""
        self._summaries.clear()

