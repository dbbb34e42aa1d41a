"""Book entities for the reading plan engine."""

from pydantic import BaseModel, ConfigDict, Field


class BookMetadata(BaseModel):
    """Catalogue data for a book.
    
    Books are owned elsewhere; the engine only consumes ``total_pages``
    when snapshotting it into a new plan.
    """
    
    model_config = ConfigDict(frozen=True)
    
    book_id: str = Field(description="Unique identifier for the book")
    title: str = Field(min_length=1, max_length=200, description="Title of the book")
    author: str = Field(default="Unknown", description="Author of the book")
    total_pages: int = Field(default=0, ge=0, description="Total number of pages in the book, 0 when unknown")
