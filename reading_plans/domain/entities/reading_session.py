"""Session entities for the reading plan engine."""
import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReadingSession(BaseModel):
    """One logged instance of reading activity, optionally tied to a plan.
    
    Sessions are immutable once created.
    """
    
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "3f2b1c9e-6c1d-4a53-9d0e-4b7b0a3c1f22",
                "user_id": "abc123",
                "book_id": "book-42",
                "plan_id": "plan-001",
                "pages_read": 15,
                "minutes_spent": 20,
                "koach_earned": 15
            }
        },
    )
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: Optional[str] = None
    book_id: str
    plan_id: Optional[str] = None
    pages_read: int = Field(gt=0)
    minutes_spent: int = Field(default=0, ge=0)
    koach_earned: int = Field(default=0, ge=0)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
