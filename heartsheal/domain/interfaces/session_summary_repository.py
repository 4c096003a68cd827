"""Session Summary Repository interface."""

from typing import Protocol

from ..entities.session_summary import SessionSummary


class SessionSummaryRepository(Protocol):
    """Protocol defining the interface for completed-session storage.

    This interface can be implemented by different storage backends
    (in-memory, DynamoDB, etc.) to provide summary persistence.
    """

    async def save_summary(self, summary: SessionSummary) -> None:
        """Save a summary to the repository.

        Args:
            summary: The summary entity to save.
        """
        ...

    async def get_summary(self, summary_id: str) -> SessionSummary:
        """Retrieve a summary by ID from the repository.

        Args:
            summary_id: The unique identifier of the summary.

        Returns:
            SessionSummary: The summary entity.

        Raises:
            ValueError: If the summary is not found.
        """
        ...

    async def list_summaries(self) -> list[SessionSummary]:
        """List all stored summaries, most recent first."""
        ...

    async def delete_summary(self, summary_id: str) -> None:
        """Delete a summary from the repository.

        Args:
            summary_id: The unique identifier of the summary to delete.

        Raises:
            ValueError: If the summary is not found.
        """
        ...
