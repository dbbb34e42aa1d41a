"""DynamoDB implementation of BookProvider."""

from typing import Any, Dict

import boto3

from ..domain.entities.book import BookMetadata
from ..domain.interfaces.book_provider import BookProvider


class DynamoDBBookProvider(BookProvider):
    """Book catalogue backed by a DynamoDB table.
    
    The table uses ``bookId`` as its key and stores ``title``, ``author``
    and ``total_pages``.
    """
    
    def __init__(self, table_name: str, region_name: str = "us-east-1"):
        """Initialize the DynamoDB book provider.
        
        Args:
            table_name: The name of the DynamoDB table for book metadata.
            region_name: AWS region name (default: us-east-1).
        """
        self.table_name = table_name
        self.region_name = region_name
        self.dynamodb = boto3.resource("dynamodb", region_name=region_name)
        self.table = self.dynamodb.Table(table_name)
    
    def get_total_pages(self, book_id: str) -> int:
        """Retrieve a book's page count.
        
        Raises:
            ValueError: If the book is not found.
        """
        return self.get_book_metadata(book_id).total_pages
    
    def get_book_metadata(self, book_id: str) -> BookMetadata:
        """Retrieve book metadata by book ID from DynamoDB.
        
        Args:
            book_id: The unique identifier of the book.
            
        Returns:
            BookMetadata: The book metadata entity.
            
        Raises:
            ValueError: If the book is not found.
        """
        response = self.table.get_item(Key={"bookId": book_id})
        
        if "Item" not in response:
            raise ValueError(f"Book with id {book_id} not found")
        
        return self._item_to_book_metadata(response["Item"])
    
    def _item_to_book_metadata(self, item: Dict[str, Any]) -> BookMetadata:
        """Convert a DynamoDB item to a BookMetadata entity.
        
        A missing or non-positive ``total_pages`` means the length is unknown.
        
        Args:
            item: The DynamoDB item with keys: bookId, title, author, total_pages
            
        Returns:
            BookMetadata: The book metadata entity.
        """
        total_pages = item.get("total_pages")
        return BookMetadata(
            book_id=item["bookId"],
            title=item["title"],
            author=item.get("author", "Unknown"),
            total_pages=max(0, int(total_pages)) if total_pages is not None else 0,
        )
