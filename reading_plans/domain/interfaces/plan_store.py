"""Plan Store interface."""

from typing import Optional, Protocol, runtime_checkable

from ..entities.reading_plan import PlanPatch, PlanStatus, ReadingPlan


@runtime_checkable
class PlanStore(Protocol):
    """Protocol defining the interface for reading plan storage.
    
    This interface can be implemented by different storage backends
    (in-memory, DynamoDB, etc.). ``update_plan`` must apply page and
    minute deltas as increments on the stored values, never as absolute
    writes computed from an earlier read.
    """
    
    async def create_plan(self, plan: ReadingPlan) -> ReadingPlan:
        """Store a new plan.
        
        Args:
            plan: The plan to store. Its ``id`` is ignored.
            
        Returns:
            ReadingPlan: The stored plan with its assigned ``id``.
        """
        ...
    
    async def get_plan(self, plan_id: str) -> ReadingPlan:
        """Retrieve a plan by ID.
        
        Raises:
            ValueError: If the plan is not found.
        """
        ...
    
    async def update_plan(self, plan_id: str, patch: PlanPatch) -> ReadingPlan:
        """Apply a patch to a stored plan.
        
        Args:
            plan_id: The unique identifier of the plan.
            patch: Deltas and field changes to apply.
            
        Returns:
            ReadingPlan: The plan after the patch.
            
        Raises:
            ValueError: If the plan is not found.
        """
        ...
    
    async def transition_status(
        self,
        plan_id: str,
        from_status: PlanStatus,
        to_status: PlanStatus,
    ) -> Optional[ReadingPlan]:
        """Change a plan's status only if it is currently ``from_status``.
        
        The check and the write must be a single conditional operation, so
        that among concurrent callers at most one succeeds.
        
        Returns:
            ReadingPlan: The plan after the change, or None when the stored
            status was not ``from_status`` or the plan does not exist.
        """
        ...
    
    async def list_plans(self, user_id: str) -> list[ReadingPlan]:
        """List the plans owned by a user."""
        ...
