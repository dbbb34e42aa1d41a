"""Plan orchestrator coordinating goal, progress, completion and reward rules."""

import asyncio
import logging
from collections import defaultdict
from datetime import date
from typing import Callable, Optional, Union

from ..entities.errors import (
    GoalValidationError,
    NotFound,
    StorageFailure,
    ValidationFailed,
)
from ..entities.reading_plan import GoalMode, PlanPatch, PlanStatus, ReadingPlan
from ..entities.reading_session import ReadingSession
from ..entities.results import PlanProgress, SessionResult
from ..interfaces.book_provider import BookProvider
from ..interfaces.plan_store import PlanStore
from ..interfaces.progress_writer import ProgressWriter
from ..interfaces.session_store import SessionStore
from . import completion_evaluator, goal_resolver, progress_accumulator, reward_calculator

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200


class PlanOrchestrator:
    """
    Service that owns reading plan and session persistence.
    
    The pure rule modules take plain data and return plain data; this
    service reads the current stored state, validates the session against
    it and commits the session and its plan increment through the
    progress writer, which stores both or neither.
    
    Sessions against the same plan are applied one at a time through a
    per-plan lock. Across processes, progress is an additive patch so no
    pages are lost, completion is decided from the plan the store returns
    after the increment, and the status flip is a conditional write so
    only one session ever completes a plan.
    """
    
    def __init__(
        self,
        plan_store: PlanStore,
        session_store: SessionStore,
        book_provider: BookProvider,
        progress_writer: ProgressWriter,
        points_per_page: int = reward_calculator.DEFAULT_POINTS_PER_PAGE,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the orchestrator with injected dependencies.
        
        Args:
            plan_store: Storage for reading plans
            session_store: Append-only storage for reading sessions
            book_provider: Catalogue used to snapshot book lengths
            progress_writer: Writes a session and its plan increment together
            points_per_page: Koach points awarded per page read
            today: Clock used for estimates
        """
        self.plan_store = plan_store
        self.session_store = session_store
        self.book_provider = book_provider
        self.progress_writer = progress_writer
        self.points_per_page = points_per_page
        self._today = today
        self._plan_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
    
    async def create_plan(
        self,
        user_id: str,
        book_id: str,
        start_date: date,
        mode: Union[GoalMode, str],
        goal_input: goal_resolver.GoalInput,
        title: str,
        total_pages: Optional[int] = None,
    ) -> ReadingPlan:
        """
        Create and store a reading plan.
        
        Args:
            user_id: Owner of the plan
            book_id: Book the plan is for
            start_date: First day of the plan
            mode: ``pages_per_day`` or ``finish_by_date``
            goal_input: Pages per day, or the target finish date
            title: Display title, must not be blank
            total_pages: Book length; looked up from the book provider when omitted
            
        Returns:
            The stored plan, including its assigned id
            
        Raises:
            ValidationFailed: If any input is invalid
            NotFound: If the book is unknown to the book provider
            StorageFailure: If the plan could not be stored
        """
        title = (title or "").strip()
        if not title:
            raise ValidationFailed("title", "Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationFailed("title", f"Title must be at most {MAX_TITLE_LENGTH} characters")
        
        if total_pages is None:
            total_pages = self._snapshot_total_pages(book_id)
        elif total_pages < 0:
            raise ValidationFailed("totalPages", "Total pages cannot be negative")
        
        try:
            goal = goal_resolver.resolve(mode, total_pages, start_date, goal_input)
        except GoalValidationError as e:
            raise ValidationFailed(e.field, e.reason) from e
        
        plan = ReadingPlan(
            user_id=user_id,
            book_id=book_id,
            title=title,
            start_date=goal_resolver.as_date(start_date),
            end_date=goal.end_date,
            goal_mode=GoalMode(mode),
            daily_goal=goal.daily_goal,
            total_pages=total_pages,
        )
        
        try:
            stored = await self.plan_store.create_plan(plan)
        except Exception as e:
            logger.error(f"Failed to store plan for book {book_id}: {e}", exc_info=True)
            raise StorageFailure(e) from e
        
        logger.info(
            f"Created plan {stored.id} for book {book_id}: "
            f"{stored.daily_goal} pages/day until {stored.end_date}"
        )
        return stored
    
    async def log_session(
        self,
        book_id: str,
        *,
        pages_read: int,
        plan_id: Optional[str] = None,
        minutes_spent: Optional[int] = None,
        notes: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> SessionResult:
        """
        Record a reading session and apply it to its plan, if any.
        
        Args:
            book_id: Book that was read
            pages_read: Pages read in the session, must be positive
            plan_id: Plan to apply the session to; free reading when omitted
            minutes_spent: Minutes spent reading, defaults to 0
            notes: Free-form notes
            user_id: Reader who logged the session
            
        Returns:
            The stored session, the koach awarded, the updated plan and
            whether this session completed the book
            
        Raises:
            ValidationFailed: If pages or minutes are invalid, or the plan is
                for another book or owned by another user
            NotFound: If the plan does not exist
            StorageFailure: If the session or plan could not be stored
        """
        if isinstance(pages_read, bool) or not isinstance(pages_read, int) or pages_read <= 0:
            raise ValidationFailed("pagesRead", "Pages read must be greater than 0")
        if minutes_spent is None:
            minutes_spent = 0
        if isinstance(minutes_spent, bool) or not isinstance(minutes_spent, int) or minutes_spent < 0:
            raise ValidationFailed("minutesSpent", "Minutes spent cannot be negative")
        
        draft = ReadingSession(
            user_id=user_id,
            book_id=book_id,
            plan_id=plan_id,
            pages_read=pages_read,
            minutes_spent=minutes_spent,
            notes=notes,
        )
        session = draft.model_copy(
            update={"koach_earned": reward_calculator.calculate(draft, self.points_per_page)}
        )
        
        if plan_id is None:
            stored = await self._append_session(session)
            logger.info(f"Logged free reading session {stored.id}: {pages_read} pages")
            return SessionResult(session=stored, koach_earned=stored.koach_earned)
        
        async with self._plan_locks[plan_id]:
            return await self._apply_to_plan(plan_id, session)
    
    async def _apply_to_plan(self, plan_id: str, session: ReadingSession) -> SessionResult:
        # Always start from the stored plan, never a cached copy
        current = await self._load_plan(plan_id)
        if current.book_id != session.book_id:
            raise ValidationFailed("bookId", f"Plan {plan_id} is for a different book")
        if session.user_id is not None and session.user_id != current.user_id:
            raise ValidationFailed("userId", f"Plan {plan_id} belongs to another user")
        
        patch = PlanPatch(
            pages_delta=session.pages_read,
            minutes_delta=session.minutes_spent,
            last_read_at=session.created_at,
        )
        try:
            updated = await self.progress_writer.write_progress(plan_id, patch, session)
        except ValueError as e:
            raise NotFound("Plan", plan_id) from e
        except Exception as e:
            logger.error(f"Failed to record session {session.id} on plan {plan_id}: {e}", exc_info=True)
            raise StorageFailure(e) from e
        
        # Decide completion from the stored result, which includes progress
        # written by other processes since this plan was read
        step = completion_evaluator.transition(
            updated.status, completion_evaluator.evaluate(updated)
        )
        just_completed = False
        if step.just_completed:
            completed = await self._complete(plan_id)
            if completed is not None:
                updated = completed
                just_completed = True
                logger.info(f"Plan {plan_id} completed: {updated.current_page}/{updated.total_pages} pages")
        
        logger.info(
            f"Logged session {session.id} on plan {plan_id}: "
            f"{session.pages_read} pages, {session.koach_earned} koach"
        )
        
        return SessionResult(
            session=session,
            koach_earned=session.koach_earned,
            plan=updated,
            book_just_completed=just_completed,
        )
    
    async def _complete(self, plan_id: str) -> Optional[ReadingPlan]:
        """Flip an active plan to completed; None if another writer already did."""
        try:
            return await self.plan_store.transition_status(
                plan_id, PlanStatus.ACTIVE, PlanStatus.COMPLETED
            )
        except Exception as e:
            # The session and progress are stored; the next session retries the flip
            logger.error(f"Failed to mark plan {plan_id} completed: {e}", exc_info=True)
            return None
    
    async def get_plan(self, plan_id: str) -> PlanProgress:
        """Get a plan with its progress percentage and a fresh estimate."""
        plan = await self._load_plan(plan_id)
        return self._with_progress(plan)
    
    async def list_plans(self, user_id: str) -> list[PlanProgress]:
        """List a user's plans with their progress."""
        try:
            plans = await self.plan_store.list_plans(user_id)
        except Exception as e:
            logger.error(f"Failed to list plans for user {user_id}: {e}", exc_info=True)
            raise StorageFailure(e) from e
        return [self._with_progress(plan) for plan in plans]
    
    async def list_sessions(self, plan_id: str) -> list[ReadingSession]:
        """List the sessions logged against a plan."""
        await self._load_plan(plan_id)
        try:
            return await self.session_store.list_sessions(plan_id=plan_id)
        except Exception as e:
            raise StorageFailure(e) from e
    
    async def koach_balance(self, user_id: str) -> int:
        """Total koach points a user has earned across all sessions."""
        try:
            sessions = await self.session_store.list_sessions(user_id=user_id)
        except Exception as e:
            logger.error(f"Failed to list sessions for user {user_id}: {e}", exc_info=True)
            raise StorageFailure(e) from e
        return progress_accumulator.accumulate(sessions).koach
    
    def _with_progress(self, plan: ReadingPlan) -> PlanProgress:
        return PlanProgress(
            plan=plan,
            percentage=progress_accumulator.progress_percentage(plan),
            estimate=progress_accumulator.estimate(plan, self._today()),
        )
    
    def _snapshot_total_pages(self, book_id: str) -> int:
        try:
            return self.book_provider.get_total_pages(book_id)
        except ValueError as e:
            raise NotFound("Book", book_id) from e
        except Exception as e:
            logger.error(f"Failed to look up book {book_id}: {e}", exc_info=True)
            raise StorageFailure(e) from e
    
    async def _load_plan(self, plan_id: str) -> ReadingPlan:
        try:
            return await self.plan_store.get_plan(plan_id)
        except ValueError as e:
            raise NotFound("Plan", plan_id) from e
        except Exception as e:
            logger.error(f"Failed to load plan {plan_id}: {e}", exc_info=True)
            raise StorageFailure(e) from e
    
    async def _append_session(self, session: ReadingSession) -> ReadingSession:
        try:
            return await self.session_store.append_session(session)
        except Exception as e:
            logger.error(f"Failed to store session {session.id}: {e}", exc_info=True)
            raise StorageFailure(e) from e
