"""Tests for DynamoDB book provider."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from reading_plans.domain.entities.book import BookMetadata
from reading_plans.infrastructure.dynamodb_book_provider import DynamoDBBookProvider


@pytest.fixture
def mock_table():
    """Create a mock DynamoDB table."""
    with patch("reading_plans.infrastructure.dynamodb_book_provider.boto3") as mock_boto3:
        mock_resource = MagicMock()
        mock_table = MagicMock()
        mock_boto3.resource.return_value = mock_resource
        mock_resource.Table.return_value = mock_table
        yield mock_table


@pytest.fixture
def provider(mock_table):
    return DynamoDBBookProvider("test-books", region_name="us-east-1")


def test_get_book_metadata(provider, mock_table):
    """Test that metadata is read from the book item."""
    mock_table.get_item.return_value = {
        "Item": {"bookId": "dune", "title": "Dune", "author": "Frank Herbert", "total_pages": Decimal("412")}
    }
    
    metadata = provider.get_book_metadata("dune")
    
    assert metadata == BookMetadata(book_id="dune", title="Dune", author="Frank Herbert", total_pages=412)
    mock_table.get_item.assert_called_once_with(Key={"bookId": "dune"})


def test_get_total_pages(provider, mock_table):
    mock_table.get_item.return_value = {"Item": {"bookId": "dune", "title": "Dune", "total_pages": 412}}
    
    assert provider.get_total_pages("dune") == 412


def test_missing_length_is_unknown(provider, mock_table):
    """Test that a book without a length reports 0 pages."""
    mock_table.get_item.return_value = {"Item": {"bookId": "zine", "title": "Zine"}}
    
    metadata = provider.get_book_metadata("zine")
    
    assert metadata.total_pages == 0
    assert metadata.author == "Unknown"


def test_missing_book(provider, mock_table):
    mock_table.get_item.return_value = {}
    
    with pytest.raises(ValueError, match="Book with id nope not found"):
        provider.get_total_pages("nope")
