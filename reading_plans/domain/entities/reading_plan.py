"""Reading plan entities for the reading plan engine."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GoalMode(str, Enum):
    """How the reader expressed their goal when the plan was created."""
    PAGES_PER_DAY = "pages_per_day"
    FINISH_BY_DATE = "finish_by_date"


class PlanStatus(str, Enum):
    """Plan status enum."""
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class ReadingPlan(BaseModel):
    """Plan entity representing a reader's intent to finish a book."""
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "plan-001",
                "user_id": "abc123",
                "book_id": "book-42",
                "title": "Plan for Dune",
                "start_date": "2024-01-01",
                "end_date": "2024-01-10",
                "goal_mode": "pages_per_day",
                "daily_goal": 25,
                "total_pages": 250,
                "current_page": 0,
                "status": "active"
            }
        },
    )
    
    id: Optional[str] = None
    user_id: str
    book_id: str
    title: str = Field(min_length=1, max_length=200)
    start_date: date
    end_date: date
    goal_mode: GoalMode = GoalMode.PAGES_PER_DAY
    daily_goal: int = Field(gt=0)
    total_pages: int = Field(default=0, ge=0, description="Snapshot of the book length, 0 when unknown")
    current_page: int = Field(default=0, ge=0)
    minutes_spent: int = Field(default=0, ge=0)
    status: PlanStatus = PlanStatus.ACTIVE
    last_read_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def _check_dates(self) -> "ReadingPlan":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class PlanPatch(BaseModel):
    """Additive progress change applied to a stored plan.
    
    Page and minute changes are deltas rather than absolute values so that
    stores can apply them as atomic increments. ``last_read_at`` of None
    leaves the stored value unchanged.
    """
    
    pages_delta: int = 0
    minutes_delta: int = 0
    last_read_at: Optional[datetime] = None
