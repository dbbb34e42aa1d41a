"""Domain entities for the reading plan engine."""

from .book import BookMetadata
from .errors import (
    ErrorKind,
    GoalValidationError,
    NotFound,
    ReadingPlanError,
    StorageFailure,
    ValidationFailed,
)
from .reading_plan import GoalMode, PlanPatch, PlanStatus, ReadingPlan
from .reading_session import ReadingSession
from .results import (
    CompletionResult,
    PlanEstimate,
    PlanProgress,
    ProgressTotals,
    ResolvedGoal,
    SessionResult,
    StatusTransition,
)

__all__ = [
    # Plan entities
    "ReadingPlan",
    "PlanPatch",
    "PlanStatus",
    "GoalMode",
    # Session entities
    "ReadingSession",
    # Book entities
    "BookMetadata",
    # Result values
    "ResolvedGoal",
    "ProgressTotals",
    "PlanEstimate",
    "CompletionResult",
    "StatusTransition",
    "PlanProgress",
    "SessionResult",
    # Errors
    "ErrorKind",
    "ReadingPlanError",
    "ValidationFailed",
    "StorageFailure",
    "NotFound",
    "GoalValidationError",
]
