"""Book provider protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class BookProvider(Protocol):
    """Protocol for book catalogue providers.
    
    The engine only needs a book's length, snapshotted when a plan is
    created. Implementations can use different backends (DynamoDB, local).
    """
    
    def get_total_pages(self, book_id: str) -> int:
        """Retrieve the number of pages in a book.
        
        Args:
            book_id: The unique identifier of the book.
            
        Returns:
            int: The page count, 0 when the catalogue does not know it.
            
        Raises:
            ValueError: If the book is not found.
        """
        ...
