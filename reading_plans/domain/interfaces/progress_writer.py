"""Progress writer interface."""

from typing import Protocol, runtime_checkable

from ..entities.reading_plan import PlanPatch, ReadingPlan
from ..entities.reading_session import ReadingSession


@runtime_checkable
class ProgressWriter(Protocol):
    """Protocol for recording a session together with its plan progress.
    
    A session logged against a plan and the plan increment it causes are
    persisted together: either both are stored or neither is.
    """
    
    async def write_progress(
        self,
        plan_id: str,
        patch: PlanPatch,
        session: ReadingSession,
    ) -> ReadingPlan:
        """Apply a patch to a plan and append the session as one write.
        
        Args:
            plan_id: The plan the session was logged against.
            patch: The progress increment caused by the session.
            session: The session to append.
            
        Returns:
            ReadingPlan: The plan as stored after the write. Writers in other
            processes may already have added their own progress to it.
            
        Raises:
            ValueError: If the plan is not found.
        """
        ...
