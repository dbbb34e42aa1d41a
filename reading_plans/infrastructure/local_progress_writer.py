"""Local in-memory implementation of Progress Writer."""

from ..domain.entities.reading_plan import PlanPatch, ReadingPlan
from ..domain.entities.reading_session import ReadingSession
from ..domain.interfaces.plan_store import PlanStore
from ..domain.interfaces.progress_writer import ProgressWriter
from .local_session_store import LocalSessionStore


class LocalProgressWriter(ProgressWriter):
    """Writes a session and its plan increment to the in-memory stores.
    
    The session is appended first. If the plan update then fails, the
    session is discarded again, so neither write survives.
    """
    
    def __init__(self, plan_store: PlanStore, session_store: LocalSessionStore):
        self.plan_store = plan_store
        self.session_store = session_store
    
    async def write_progress(
        self,
        plan_id: str,
        patch: PlanPatch,
        session: ReadingSession,
    ) -> ReadingPlan:
        """Append the session, then apply the patch to the plan.
        
        Raises:
            ValueError: If the plan is not found.
        """
        stored = await self.session_store.append_session(session)
        try:
            return await self.plan_store.update_plan(plan_id, patch)
        except Exception:
            self.session_store.discard_session(stored.id)
            raise
