"""DynamoDB implementation of Session Summary Repository."""

from datetime import datetime
from typing import Any, Dict, Optional

import aioboto3
from botocore.exceptions import ClientError

from ..domain.entities.session_summary import SessionSummary
from ..domain.interfaces.session_summary_repository import SessionSummaryRepository


class DynamoDBSessionSummaryRepository(SessionSummaryRepository):
    """DynamoDB repository for completed breathing sessions."""

    def __init__(
        self,
        table_name: str,
        region_name: str = "us-east-1",
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        aws_session_token: Optional[str] = None,
    ):
        """Initialize the DynamoDB summary repository.

        Args:
            table_name: The name of the DynamoDB table.
            region_name: AWS region name (default: us-east-1).
            aws_access_key_id: Optional explicit credentials; the default
                credential chain is used when omitted.
            aws_secret_access_key: Optional explicit credentials.
            aws_session_token: Optional session token.
        """
        self.table_name = table_name
        self.region_name = region_name
        self._session = aioboto3.Session(
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            aws_session_token=aws_session_token,
        )

    async def save_summary(self, summary: SessionSummary) -> None:
        """Save a summary to DynamoDB.

        Args:
            summary: The summary entity to save.

        Raises:
            Exception: If the save operation fails.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            await table.put_item(Item=self._summary_to_item(summary))

    async def get_summary(self, summary_id: str) -> SessionSummary:
        """Retrieve a summary by ID from DynamoDB.

        Args:
            summary_id: The unique identifier of the summary.

        Returns:
            SessionSummary: The summary entity.

        Raises:
            ValueError: If the summary is not found.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            response = await table.get_item(Key={"id": summary_id})

            if "Item" not in response:
                raise ValueError(f"Summary with id {summary_id} not found")

            return self._item_to_summary(response["Item"])

    async def list_summaries(self) -> list[SessionSummary]:
        """List all summaries in the table, most recent first."""
        summaries = []
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            scan_kwargs: Dict[str, Any] = {}
            while True:
                response = await table.scan(**scan_kwargs)
                summaries.extend(self._item_to_summary(item) for item in response.get("Items", []))
                if "LastEvaluatedKey" not in response:
                    break
                scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]

        return sorted(summaries, key=lambda s: s.completed_at, reverse=True)

    async def delete_summary(self, summary_id: str) -> None:
        """Delete a summary from DynamoDB.

        Args:
            summary_id: The unique identifier of the summary to delete.

        Raises:
            ValueError: If the summary is not found.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            try:
                await table.delete_item(
                    Key={"id": summary_id},
                    ConditionExpression="attribute_exists(id)",
                )
            except ClientError as e:
                if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                    raise ValueError(f"Summary with id {summary_id} not found") from e
                raise

    def _summary_to_item(self, summary: SessionSummary) -> Dict[str, Any]:
        """Convert a SessionSummary entity to a DynamoDB item.

        Args:
            summary: The summary entity.

        Returns:
            Dict: The DynamoDB item representation.
        """
        item = {
            "id": str(summary.id),
            "pattern_id": summary.pattern_id,
            "pattern_name": summary.pattern_name,
            "duration_seconds": summary.duration_seconds,
            "cycles_completed": summary.cycles_completed,
            "completed_at": summary.completed_at.isoformat(),
        }
        if summary.notes:
            item["notes"] = summary.notes
        return item

    def _item_to_summary(self, item: Dict[str, Any]) -> SessionSummary:
        """Convert a DynamoDB item to a SessionSummary entity.

        Args:
            item: The DynamoDB item.

        Returns:
            SessionSummary: The summary entity.
        """
        return SessionSummary(
            id=item["id"],
            pattern_id=item["pattern_id"],
            pattern_name=item["pattern_name"],
            duration_seconds=int(item["duration_seconds"]),
            cycles_completed=int(item["cycles_completed"]),
            completed_at=datetime.fromisoformat(item["completed_at"]),
            notes=item.get("notes"),
        )
