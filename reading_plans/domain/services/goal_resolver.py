"""Goal resolution: turn a reader's goal into a daily target and end date."""

from datetime import date, datetime, timedelta
from typing import Union

from ..entities.errors import GoalValidationError
from ..entities.reading_plan import GoalMode
from ..entities.results import ResolvedGoal

# Used when the book length is unknown.
FALLBACK_PLAN_DAYS = 30
FALLBACK_DAILY_GOAL = 10

GoalInput = Union[int, date]


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def as_date(value: date) -> date:
    # datetime is a date subclass; time of day is irrelevant to plans
    return value.date() if isinstance(value, datetime) else value


def resolve(
    mode: Union[GoalMode, str],
    total_pages: int,
    start_date: date,
    goal_input: GoalInput,
) -> ResolvedGoal:
    """Resolve a goal into a ``ResolvedGoal``.
    
    Args:
        mode: ``pages_per_day`` or ``finish_by_date``.
        total_pages: Length of the book, 0 when unknown.
        start_date: First day of the plan.
        goal_input: Pages per day for ``pages_per_day``, the target finish
            date for ``finish_by_date``.
    
    Returns:
        ResolvedGoal: The daily goal and end date, both counted inclusively
        (reading on the start day is day 1).
    
    Raises:
        GoalValidationError: If the input cannot produce a valid plan.
    """
    try:
        mode = GoalMode(mode)
    except ValueError:
        raise GoalValidationError("goalMode", f"Unknown goal mode: {mode}")
    
    start_date = as_date(start_date)
    total_pages = max(0, total_pages or 0)
    
    if mode is GoalMode.PAGES_PER_DAY:
        return _resolve_pages_per_day(total_pages, start_date, goal_input)
    return _resolve_finish_by_date(total_pages, start_date, goal_input)


def _resolve_pages_per_day(total_pages: int, start_date: date, goal_input: GoalInput) -> ResolvedGoal:
    if isinstance(goal_input, (bool, date)) or not isinstance(goal_input, int):
        raise GoalValidationError("pagesPerDay", "Pages per day must be a whole number")
    
    daily_goal = goal_input
    if daily_goal <= 0:
        raise GoalValidationError("pagesPerDay", "Pages per day must be greater than 0")
    if total_pages > 0 and daily_goal > total_pages:
        raise GoalValidationError(
            "pagesPerDay", f"Pages per day cannot exceed the book's {total_pages} pages"
        )
    
    if total_pages == 0:
        return ResolvedGoal(daily_goal=daily_goal, end_date=start_date + timedelta(days=FALLBACK_PLAN_DAYS))
    
    days_to_complete = _ceil_div(total_pages, daily_goal)
    return ResolvedGoal(
        daily_goal=daily_goal,
        end_date=start_date + timedelta(days=days_to_complete - 1),
    )


def _resolve_finish_by_date(total_pages: int, start_date: date, goal_input: GoalInput) -> ResolvedGoal:
    if not isinstance(goal_input, date):
        raise GoalValidationError("endDate", "Finish date must be a date")
    
    end_date = as_date(goal_input)
    if end_date <= start_date:
        raise GoalValidationError("endDate", "End date must be after start date")
    
    if total_pages == 0:
        return ResolvedGoal(daily_goal=FALLBACK_DAILY_GOAL, end_date=end_date)
    
    # +1 counts both the start and the end day
    diff_days = (end_date - start_date).days + 1
    return ResolvedGoal(daily_goal=_ceil_div(total_pages, diff_days), end_date=end_date)
