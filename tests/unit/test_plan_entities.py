"""Unit tests for plan and session entities."""

import pytest
from datetime import date, datetime

from pydantic import ValidationError

from reading_plans.domain.entities import (
    ErrorKind,
    GoalMode,
    NotFound,
    PlanPatch,
    PlanStatus,
    ReadingPlan,
    ReadingSession,
    StorageFailure,
    ValidationFailed,
)


class TestPlanStatus:
    """Tests for PlanStatus enum."""
    
    def test_plan_status_values(self):
        """Test that plan statuses have correct string values."""
        assert PlanStatus.ACTIVE.value == "active"
        assert PlanStatus.COMPLETED.value == "completed"
        assert PlanStatus.PAUSED.value == "paused"
        assert len(PlanStatus) == 3


class TestReadingPlan:
    """Tests for ReadingPlan entity."""
    
    def test_plan_creation_minimal(self):
        """Test creating a plan with minimal required fields."""
        plan = ReadingPlan(
            user_id="user-1",
            book_id="book-1",
            title="Plan",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 10),
            daily_goal=25,
        )
        
        assert plan.id is None
        assert plan.goal_mode == GoalMode.PAGES_PER_DAY
        assert plan.total_pages == 0
        assert plan.current_page == 0
        assert plan.minutes_spent == 0
        assert plan.status == PlanStatus.ACTIVE
        assert plan.last_read_at is None
        assert isinstance(plan.created_at, datetime)
    
    def test_daily_goal_must_be_positive(self):
        """Test that daily_goal must be at least 1."""
        with pytest.raises(ValidationError):
            ReadingPlan(
                user_id="user-1",
                book_id="book-1",
                title="Plan",
                start_date=date(2024, 1, 1),
                end_date=date(2024, 1, 10),
                daily_goal=0,
            )
    
    def test_end_date_cannot_precede_start(self):
        """Test that end_date may not be before start_date."""
        with pytest.raises(ValidationError):
            ReadingPlan(
                user_id="user-1",
                book_id="book-1",
                title="Plan",
                start_date=date(2024, 1, 10),
                end_date=date(2024, 1, 1),
                daily_goal=25,
            )


class TestReadingSession:
    """Tests for ReadingSession entity."""
    
    def test_session_defaults(self):
        """Test creating a session with minimal fields."""
        session = ReadingSession(book_id="book-1", pages_read=10)
        
        assert session.id
        assert session.plan_id is None
        assert session.minutes_spent == 0
        assert session.koach_earned == 0
        assert isinstance(session.created_at, datetime)
    
    def test_session_ids_are_unique(self):
        """Test that each session gets its own id."""
        first = ReadingSession(book_id="book-1", pages_read=10)
        second = ReadingSession(book_id="book-1", pages_read=10)
        
        assert first.id != second.id
    
    @pytest.mark.parametrize("pages_read", [0, -5])
    def test_pages_read_must_be_positive(self, pages_read):
        """Test that pages_read must be at least 1."""
        with pytest.raises(ValidationError):
            ReadingSession(book_id="book-1", pages_read=pages_read)
    
    def test_session_is_immutable(self):
        """Test that sessions cannot be edited after creation."""
        session = ReadingSession(book_id="book-1", pages_read=10)
        
        with pytest.raises(ValidationError):
            session.pages_read = 20


class TestPlanPatch:
    """Tests for PlanPatch."""
    
    def test_patch_defaults(self):
        """Test that an empty patch changes nothing."""
        patch = PlanPatch()
        
        assert patch.pages_delta == 0
        assert patch.minutes_delta == 0
        assert patch.last_read_at is None
    
    def test_patch_has_no_status(self):
        """Test that status changes are not part of a progress patch."""
        assert "status" not in PlanPatch.model_fields
    
    def test_plan_example_schema(self):
        """Test that the plan schema carries its example."""
        schema = ReadingPlan.model_json_schema()
        
        assert schema["example"]["goal_mode"] == "pages_per_day"


class TestErrors:
    """Tests for the error taxonomy."""
    
    def test_validation_failed(self):
        error = ValidationFailed("pagesRead", "Pages read must be greater than 0")
        
        assert error.kind == ErrorKind.VALIDATION_FAILED
        assert error.field == "pagesRead"
        assert "pagesRead" in str(error)
    
    def test_storage_failure_keeps_cause(self):
        cause = RuntimeError("connection reset")
        error = StorageFailure(cause)
        
        assert error.kind == ErrorKind.STORAGE_FAILURE
        assert error.cause is cause
        assert "connection reset" in str(error)
    
    def test_not_found(self):
        error = NotFound("Plan", "plan-9")
        
        assert error.kind == ErrorKind.NOT_FOUND
        assert str(error) == "Plan with id plan-9 not found"
