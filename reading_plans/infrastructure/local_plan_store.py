"""Local in-memory implementation of Plan Store."""

import asyncio
import uuid
from typing import Dict, Optional

from ..domain.entities.reading_plan import PlanPatch, PlanStatus, ReadingPlan
from ..domain.interfaces.plan_store import PlanStore


class LocalPlanStore(PlanStore):
    """Local in-memory implementation of the Plan Store.
    
    Stores plans in a dictionary for testing and development purposes.
    Patches are applied under a lock so increments never interleave.
    """
    
    def __init__(self):
        """Initialize the local plan store with an empty dictionary."""
        self._plans: Dict[str, ReadingPlan] = {}
        self._lock = asyncio.Lock()
    
    async def create_plan(self, plan: ReadingPlan) -> ReadingPlan:
        """Store a new plan under a freshly assigned id.
        
        Args:
            plan: The plan entity to store.
            
        Returns:
            ReadingPlan: The stored plan.
        """
        stored = plan.model_copy(update={"id": str(uuid.uuid4())})
        self._plans[stored.id] = stored
        return stored
    
    async def get_plan(self, plan_id: str) -> ReadingPlan:
        """Retrieve a plan by ID from the in-memory dictionary.
        
        Args:
            plan_id: The unique identifier of the plan.
            
        Returns:
            ReadingPlan: The plan entity.
            
        Raises:
            ValueError: If the plan is not found.
        """
        if plan_id not in self._plans:
            raise ValueError(f"Plan with id {plan_id} not found")
        
        return self._plans[plan_id]
    
    async def update_plan(self, plan_id: str, patch: PlanPatch) -> ReadingPlan:
        """Apply a patch to a stored plan.
        
        Args:
            plan_id: The unique identifier of the plan.
            patch: The deltas and field changes to apply.
            
        Returns:
            ReadingPlan: The updated plan.
            
        Raises:
            ValueError: If the plan is not found.
        """
        async with self._lock:
            if plan_id not in self._plans:
                raise ValueError(f"Plan with id {plan_id} not found")
            
            plan = self._plans[plan_id]
            update = {
                "current_page": plan.current_page + patch.pages_delta,
                "minutes_spent": plan.minutes_spent + patch.minutes_delta,
            }
            if patch.last_read_at is not None:
                update["last_read_at"] = patch.last_read_at
            
            updated = plan.model_copy(update=update)
            self._plans[plan_id] = updated
            return updated
    
    async def transition_status(
        self,
        plan_id: str,
        from_status: PlanStatus,
        to_status: PlanStatus,
    ) -> Optional[ReadingPlan]:
        """Change a plan's status if it is currently ``from_status``.
        
        Returns:
            ReadingPlan: The updated plan, or None if the status differed or
            the plan does not exist.
        """
        async with self._lock:
            plan = self._plans.get(plan_id)
            if plan is None or plan.status != from_status:
                return None
            
            updated = plan.model_copy(update={"status": to_status})
            self._plans[plan_id] = updated
            return updated
    
    async def list_plans(self, user_id: str) -> list[ReadingPlan]:
        """List all plans owned by a user.
        
        Returns:
            list[ReadingPlan]: The user's plans, oldest first.
        """
        plans = [plan for plan in self._plans.values() if plan.user_id == user_id]
        return sorted(plans, key=lambda plan: plan.created_at)
