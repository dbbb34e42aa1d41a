"""Value objects returned by the reading plan services."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .reading_plan import PlanStatus, ReadingPlan
from .reading_session import ReadingSession


@dataclass(frozen=True)
class ResolvedGoal:
    """Normalized goal produced from either goal mode."""
    
    daily_goal: int
    end_date: date


@dataclass(frozen=True)
class ProgressTotals:
    """Totals folded from a sequence of sessions."""
    
    pages: int = 0
    minutes: int = 0
    koach: int = 0
    sessions: int = 0


@dataclass(frozen=True)
class PlanEstimate:
    """Estimate recomputed from a plan's current facts."""
    
    pages_remaining: int
    days_remaining: int
    required_daily_pace: int
    expected_pages: int
    on_track: bool


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of evaluating a plan for completion."""
    
    is_complete: bool


@dataclass(frozen=True)
class StatusTransition:
    """Plan status after completion evaluation."""
    
    status: PlanStatus
    just_completed: bool


@dataclass(frozen=True)
class PlanProgress:
    """A plan together with its derived display values."""
    
    plan: ReadingPlan
    percentage: int
    estimate: PlanEstimate


@dataclass(frozen=True)
class SessionResult:
    """Everything produced by logging one session."""
    
    session: ReadingSession
    koach_earned: int
    plan: Optional[ReadingPlan] = None
    book_just_completed: bool = False
