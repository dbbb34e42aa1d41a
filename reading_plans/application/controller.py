"""Reading plan controller for coordinating requests with the orchestrator."""

import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Optional, Union

from ..domain.entities import GoalMode, PlanProgress, SessionResult
from ..domain.interfaces.book_provider import BookProvider
from ..domain.interfaces.plan_store import PlanStore
from ..domain.interfaces.progress_writer import ProgressWriter
from ..domain.interfaces.session_store import SessionStore
from ..domain.services import PlanOrchestrator
from ..infrastructure import (
    DynamoDBBookProvider,
    DynamoDBPlanStore,
    DynamoDBProgressWriter,
    DynamoDBSessionStore,
    LocalBookProvider,
    LocalPlanStore,
    LocalProgressWriter,
    LocalSessionStore,
)
from .config import Settings

logger = logging.getLogger(__name__)


class ReadingPlanController:
    """
    Controller for coordinating reading plan operations.
    
    This controller is injected with all necessary providers and handles
    the work for each endpoint, keeping the API layer thin.
    """
    
    def __init__(
        self,
        book_provider: BookProvider,
        plan_store: PlanStore,
        session_store: SessionStore,
        progress_writer: ProgressWriter,
        koach_points_per_page: int = 1,
    ):
        """
        Initialize the controller with injected dependencies.
        
        Args:
            book_provider: Provider for book lengths
            plan_store: Store for reading plans
            session_store: Store for reading sessions
            progress_writer: Writes a session and its plan increment together
            koach_points_per_page: Koach points awarded per page read
        """
        self.book_provider = book_provider
        self.plan_store = plan_store
        self.session_store = session_store
        self.progress_writer = progress_writer
        self.orchestrator = PlanOrchestrator(
            plan_store=plan_store,
            session_store=session_store,
            book_provider=book_provider,
            progress_writer=progress_writer,
            points_per_page=koach_points_per_page,
        )
        
        logger.info("ReadingPlanController initialized with providers")
    
    def get_health_status(self) -> dict:
        """
        Get application health status.
        
        Returns:
            Dict containing health status information
        """
        return {
            "status": "healthy",
            "providers": {
                "book_provider": type(self.book_provider).__name__,
                "plan_store": type(self.plan_store).__name__,
                "session_store": type(self.session_store).__name__,
                "progress_writer": type(self.progress_writer).__name__,
            },
        }
    
    async def create_plan(
        self,
        user_id: str,
        book_id: str,
        title: str,
        start_date: date,
        goal_mode: GoalMode,
        pages_per_day: Optional[int] = None,
        end_date: Optional[date] = None,
        total_pages: Optional[int] = None,
    ) -> dict:
        """Create a plan from request fields and return it with its progress."""
        goal_input: Union[int, date, None] = (
            pages_per_day if goal_mode is GoalMode.PAGES_PER_DAY else end_date
        )
        plan = await self.orchestrator.create_plan(
            user_id=user_id,
            book_id=book_id,
            start_date=start_date,
            mode=goal_mode,
            goal_input=goal_input,
            title=title,
            total_pages=total_pages,
        )
        return await self.get_plan(plan.id)
    
    async def get_plan(self, plan_id: str) -> dict:
        """Get one plan with its progress percentage and estimate."""
        return self._progress_to_dict(await self.orchestrator.get_plan(plan_id))
    
    async def list_plans(self, user_id: str) -> list:
        """Get all of a user's plans with progress."""
        return [self._progress_to_dict(progress) for progress in await self.orchestrator.list_plans(user_id)]
    
    async def log_session(
        self,
        book_id: str,
        pages_read: int,
        plan_id: Optional[str] = None,
        minutes_spent: Optional[int] = None,
        notes: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> dict:
        """Log a session and return the session, reward and updated plan."""
        result = await self.orchestrator.log_session(
            book_id,
            pages_read=pages_read,
            plan_id=plan_id,
            minutes_spent=minutes_spent,
            notes=notes,
            user_id=user_id,
        )
        if result.book_just_completed:
            logger.info(f"Book {book_id} finished on plan {plan_id}")
        return self._session_result_to_dict(result)
    
    async def get_koach_balance(self, user_id: str) -> dict:
        """Get a user's total koach points."""
        return {"user_id": user_id, "koach_points": await self.orchestrator.koach_balance(user_id)}
    
    def _progress_to_dict(self, progress: PlanProgress) -> dict[str, Any]:
        data = progress.plan.model_dump(mode="json")
        data["progress_percentage"] = progress.percentage
        data["estimate"] = asdict(progress.estimate)
        return data
    
    def _session_result_to_dict(self, result: SessionResult) -> dict[str, Any]:
        return {
            "session": result.session.model_dump(mode="json"),
            "koach_earned": result.koach_earned,
            "plan": result.plan.model_dump(mode="json") if result.plan else None,
            "book_just_completed": result.book_just_completed,
        }


def build_controller(settings: Settings) -> ReadingPlanController:
    """Create a controller wired to the configured storage backend."""
    if settings.storage_backend == "dynamodb":
        book_provider = DynamoDBBookProvider(settings.books_table_name, region_name=settings.aws_region)
        plan_store = DynamoDBPlanStore(settings.plans_table_name, region_name=settings.aws_region)
        session_store = DynamoDBSessionStore(settings.sessions_table_name, region_name=settings.aws_region)
        progress_writer = DynamoDBProgressWriter(plan_store, session_store)
    else:
        book_provider = LocalBookProvider()
        plan_store = LocalPlanStore()
        session_store = LocalSessionStore()
        progress_writer = LocalProgressWriter(plan_store, session_store)
    
    return ReadingPlanController(
        book_provider=book_provider,
        plan_store=plan_store,
        session_store=session_store,
        progress_writer=progress_writer,
        koach_points_per_page=settings.koach_points_per_page,
    )
