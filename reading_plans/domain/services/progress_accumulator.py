"""Progress accumulation and estimate recomputation for reading plans."""

from datetime import date
from typing import Iterable

from ..entities.reading_plan import ReadingPlan
from ..entities.reading_session import ReadingSession
from ..entities.results import PlanEstimate, ProgressTotals


def apply(plan: ReadingPlan, session: ReadingSession) -> ReadingPlan:
    """Return a copy of ``plan`` with ``session`` applied.
    
    Pages are added without capping at ``total_pages`` so that an overshoot
    stays visible. The input plan is not modified.
    """
    return plan.model_copy(
        update={
            "current_page": plan.current_page + session.pages_read,
            "minutes_spent": plan.minutes_spent + session.minutes_spent,
            "last_read_at": session.created_at,
        }
    )


def accumulate(sessions: Iterable[ReadingSession]) -> ProgressTotals:
    """Fold sessions into cumulative pages, minutes and koach points."""
    pages = minutes = koach = count = 0
    for session in sessions:
        pages += session.pages_read
        minutes += session.minutes_spent
        koach += session.koach_earned
        count += 1
    return ProgressTotals(pages=pages, minutes=minutes, koach=koach, sessions=count)


def progress_percentage(plan: ReadingPlan) -> int:
    """Display percentage in the range 0-100; 0 when the book length is unknown."""
    if plan.total_pages <= 0:
        return 0
    return round(min(100.0, plan.current_page / plan.total_pages * 100))


def estimate(plan: ReadingPlan, as_of: date) -> PlanEstimate:
    """Recompute the plan's estimate from its current facts.
    
    Args:
        plan: The plan as currently stored.
        as_of: The day to estimate from. It counts as a remaining day.
    
    Returns:
        PlanEstimate: Remaining pages and days, the pace needed to finish
        by ``end_date`` and whether the reader is keeping to ``daily_goal``.
    """
    days_remaining = max(0, (plan.end_date - as_of).days + 1)
    
    if plan.total_pages <= 0:
        return PlanEstimate(
            pages_remaining=0,
            days_remaining=days_remaining,
            required_daily_pace=0,
            expected_pages=0,
            on_track=True,
        )
    
    pages_remaining = max(0, plan.total_pages - plan.current_page)
    if days_remaining > 0:
        required_pace = -(-pages_remaining // days_remaining)
    else:
        required_pace = pages_remaining
    
    # days already behind the reader, excluding as_of itself
    days_elapsed = max(0, (as_of - plan.start_date).days)
    expected_pages = min(plan.total_pages, days_elapsed * plan.daily_goal)
    
    return PlanEstimate(
        pages_remaining=pages_remaining,
        days_remaining=days_remaining,
        required_daily_pace=required_pace,
        expected_pages=expected_pages,
        on_track=plan.current_page >= expected_pages,
    )
