"""Tests for DynamoDB session summary repository."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
import uuid

import pytest
from botocore.exceptions import ClientError

from heartsheal.domain.entities.session_summary import SessionSummary
from heartsheal.infrastructure.dynamodb_session_summary_repository import DynamoDBSessionSummaryRepository


@pytest.fixture
def mock_dynamodb_table():
    """Create a mock DynamoDB table."""
    mock_table = AsyncMock()
    return mock_table


@pytest.fixture
def mock_dynamodb_resource(mock_dynamodb_table):
    """Create a mock DynamoDB resource."""
    mock_resource = MagicMock()
    mock_resource.Table = AsyncMock(return_value=mock_dynamodb_table)
    return mock_resource


@pytest.fixture
def mock_aioboto3_session(mock_dynamodb_resource):
    """Create a mock aioboto3 session."""
    with patch("heartsheal.infrastructure.dynamodb_session_summary_repository.aioboto3.Session") as mock_session_class:
        mock_session_instance = MagicMock()
        mock_session_class.return_value = mock_session_instance

        # Setup async context manager for resource
        mock_session_instance.resource.return_value.__aenter__ = AsyncMock(return_value=mock_dynamodb_resource)
        mock_session_instance.resource.return_value.__aexit__ = AsyncMock(return_value=None)

        yield mock_session_instance


@pytest.fixture
def repository(mock_aioboto3_session):
    """Create a DynamoDB summary repository instance."""
    return DynamoDBSessionSummaryRepository(table_name="test-summaries", region_name="us-east-1")


@pytest.fixture
def sample_summary():
    """Create a sample summary entity."""
    test_uuid = uuid.UUID('12345678-1234-5678-1234-567812345678')
    return SessionSummary(
        id=test_uuid,
        pattern_id="478",
        pattern_name="4-7-8 Breathing",
        duration_seconds=57,
        cycles_completed=3,
        completed_at=datetime(2026, 1, 13, 22, 15, 0),
        notes="Fell asleep quickly",
    )


@pytest.fixture
def sample_dynamodb_item():
    """Create a sample DynamoDB item."""
    return {
        "id": "12345678-1234-5678-1234-567812345678",
        "pattern_id": "478",
        "pattern_name": "4-7-8 Breathing",
        "duration_seconds": Decimal("57"),
        "cycles_completed": Decimal("3"),
        "completed_at": "2026-01-13T22:15:00",
        "notes": "Fell asleep quickly",
    }


class TestDynamoDBSessionSummaryRepository:
    """Test cases for DynamoDBSessionSummaryRepository."""

    def test_init(self, repository):
        """Test repository initialization."""
        assert repository.table_name == "test-summaries"
        assert repository.region_name == "us-east-1"

    @pytest.mark.asyncio
    async def test_save_summary(self, repository, mock_aioboto3_session, mock_dynamodb_table, sample_summary):
        """Test saving a summary to DynamoDB."""
        await repository.save_summary(sample_summary)

        mock_aioboto3_session.resource.assert_called_with("dynamodb", region_name="us-east-1")
        mock_dynamodb_table.put_item.assert_called_once()
        item = mock_dynamodb_table.put_item.call_args.kwargs["Item"]

        assert item["id"] == "12345678-1234-5678-1234-567812345678"
        assert item["pattern_id"] == "478"
        assert item["duration_seconds"] == 57
        assert item["cycles_completed"] == 3
        assert item["completed_at"] == "2026-01-13T22:15:00"
        assert item["notes"] == "Fell asleep quickly"

    @pytest.mark.asyncio
    async def test_get_summary_success(self, repository, mock_dynamodb_table, sample_dynamodb_item):
        """Test successful summary retrieval."""
        mock_dynamodb_table.get_item.return_value = {"Item": sample_dynamodb_item}

        result = await repository.get_summary("12345678-1234-5678-1234-567812345678")

        assert isinstance(result, SessionSummary)
        assert str(result.id) == "12345678-1234-5678-1234-567812345678"
        assert result.pattern_name == "4-7-8 Breathing"
        assert result.duration_seconds == 57
        assert result.cycles_completed == 3
        assert result.completed_at == datetime(2026, 1, 13, 22, 15, 0)

        mock_dynamodb_table.get_item.assert_called_once_with(Key={"id": "12345678-1234-5678-1234-567812345678"})

    @pytest.mark.asyncio
    async def test_get_summary_not_found(self, repository, mock_dynamodb_table):
        """Test summary not found scenario."""
        mock_dynamodb_table.get_item.return_value = {}

        with pytest.raises(ValueError, match="Summary with id 12345678-1234-5678-1234-567812345678 not found"):
            await repository.get_summary("12345678-1234-5678-1234-567812345678")

    @pytest.mark.asyncio
    async def test_list_summaries_follows_pagination(self, repository, mock_dynamodb_table, sample_dynamodb_item):
        """Test that list keeps scanning until there is no LastEvaluatedKey."""
        newer_item = dict(
            sample_dynamodb_item,
            id="87654321-4321-8765-4321-876543218765",
            pattern_id="box",
            completed_at="2026-01-14T07:00:00",
        )
        mock_dynamodb_table.scan.side_effect = [
            {"Items": [sample_dynamodb_item], "LastEvaluatedKey": {"id": sample_dynamodb_item["id"]}},
            {"Items": [newer_item]},
        ]

        summaries = await repository.list_summaries()

        assert [s.pattern_id for s in summaries] == ["box", "478"]
        assert mock_dynamodb_table.scan.call_count == 2
        second_call = mock_dynamodb_table.scan.call_args_list[1]
        assert second_call.kwargs["ExclusiveStartKey"] == {"id": sample_dynamodb_item["id"]}

    @pytest.mark.asyncio
    async def test_list_summaries_empty(self, repository, mock_dynamodb_table):
        mock_dynamodb_table.scan.return_value = {"Items": []}

        assert await repository.list_summaries() == []

    @pytest.mark.asyncio
    async def test_delete_summary(self, repository, mock_dynamodb_table):
        """Test deleting a summary."""
        await repository.delete_summary("12345678-1234-5678-1234-567812345678")

        mock_dynamodb_table.delete_item.assert_called_once_with(
            Key={"id": "12345678-1234-5678-1234-567812345678"},
            ConditionExpression="attribute_exists(id)",
        )

    @pytest.mark.asyncio
    async def test_delete_summary_not_found(self, repository, mock_dynamodb_table):
        """Test that deleting a missing summary raises ValueError."""
        mock_dynamodb_table.delete_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException", "Message": "The conditional request failed"}},
            "DeleteItem",
        )

        with pytest.raises(ValueError, match="Summary with id missing not found"):
            await repository.delete_summary("missing")

    @pytest.mark.asyncio
    async def test_delete_summary_other_errors_propagate(self, repository, mock_dynamodb_table):
        mock_dynamodb_table.delete_item.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "Slow down"}},
            "DeleteItem",
        )

        with pytest.raises(ClientError):
            await repository.delete_summary("12345678-1234-5678-1234-567812345678")

    def test_summary_to_item_without_notes(self, repository, sample_summary):
        """Test that empty notes are left out of the item."""
        result = repository._summary_to_item(sample_summary.model_copy(update={"notes": None}))

        assert "notes" not in result
        assert result["pattern_name"] == "4-7-8 Breathing"

    def test_item_to_summary(self, repository, sample_dynamodb_item):
        """Test conversion of DynamoDB item to SessionSummary entity."""
        result = repository._item_to_summary(sample_dynamodb_item)

        assert isinstance(result, SessionSummary)
        assert result.duration_seconds == 57
        assert isinstance(result.duration_seconds, int)
        assert result.notes == "Fell asleep quickly"
        assert result.formatted_duration == "0:57"
