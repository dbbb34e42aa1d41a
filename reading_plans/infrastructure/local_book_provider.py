"""Local in-memory implementation of BookProvider."""

from typing import Dict

from ..domain.entities.book import BookMetadata
from ..domain.interfaces.book_provider import BookProvider


class LocalBookProvider(BookProvider):
    """Local implementation of the BookProvider protocol.
    
    Stores book metadata in a dictionary. Useful for testing and
    development purposes.
    """
    
    def __init__(self):
        """Initialize the local book provider with a few sample books."""
        self._metadata: Dict[str, BookMetadata] = {}
        
        # Pre-populate with sample books
        self.add_book(BookMetadata(book_id="the-hobbit", title="The Hobbit", author="J.R.R. Tolkien", total_pages=310))
        self.add_book(BookMetadata(book_id="dune", title="Dune", author="Frank Herbert", total_pages=412))
        self.add_book(BookMetadata(book_id="untitled-manuscript", title="Untitled Manuscript", total_pages=0))
    
    def get_total_pages(self, book_id: str) -> int:
        """Retrieve a book's page count.
        
        Raises:
            ValueError: If the book is not found.
        """
        return self.get_book_metadata(book_id).total_pages
    
    def get_book_metadata(self, book_id: str) -> BookMetadata:
        """Retrieve book metadata by book ID from the in-memory dictionary.
        
        Args:
            book_id: The unique identifier of the book.
            
        Returns:
            BookMetadata: The book metadata entity.
            
        Raises:
            ValueError: If the book is not found.
        """
        if book_id not in self._metadata:
            raise ValueError(f"Book with id {book_id} not found")
        
        return self._metadata[book_id]
    
    def add_book(self, metadata: BookMetadata) -> None:
        """Add or update book metadata in the dictionary.
        
        Args:
            metadata: The book metadata to add or update.
        """
        self._metadata[metadata.book_id] = metadata
