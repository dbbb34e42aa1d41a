"""Completion detection for reading plans."""

from ..entities.reading_plan import PlanStatus, ReadingPlan
from ..entities.results import CompletionResult, StatusTransition


def evaluate(plan: ReadingPlan) -> CompletionResult:
    """A plan is complete once its pages reach a known book length."""
    return CompletionResult(
        is_complete=plan.total_pages > 0 and plan.current_page >= plan.total_pages
    )


def transition(previous_status: PlanStatus, result: CompletionResult) -> StatusTransition:
    """Apply the status state machine.
    
    ``active`` moves to ``completed`` when the plan is complete, and only
    that move reports ``just_completed``. ``completed`` is terminal and
    ``paused`` is left alone.
    """
    if previous_status is PlanStatus.ACTIVE and result.is_complete:
        return StatusTransition(status=PlanStatus.COMPLETED, just_completed=True)
    return StatusTransition(status=previous_status, just_completed=False)
