"""DynamoDB implementation of Plan Store."""

import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional

import aioboto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from ..domain.entities.reading_plan import GoalMode, PlanPatch, PlanStatus, ReadingPlan
from ..domain.interfaces.plan_store import PlanStore


class DynamoDBPlanStore(PlanStore):
    """DynamoDB store for reading plans.
    
    Progress is written with an ``ADD`` update expression, so concurrent
    writers increment the stored counters instead of overwriting them.
    """
    
    def __init__(
        self,
        table_name: str,
        region_name: str = "us-east-1",
        user_index_name: str = "user_id-index",
    ):
        """Initialize the DynamoDB plan store.
        
        Args:
            table_name: The name of the DynamoDB table.
            region_name: AWS region name (default: us-east-1).
            user_index_name: Global secondary index keyed on ``user_id``.
        """
        self.table_name = table_name
        self.region_name = region_name
        self.user_index_name = user_index_name
        self._session = aioboto3.Session()
    
    async def create_plan(self, plan: ReadingPlan) -> ReadingPlan:
        """Store a new plan in DynamoDB under a freshly assigned id.
        
        Args:
            plan: The plan entity to store.
            
        Returns:
            ReadingPlan: The stored plan.
        """
        stored = plan.model_copy(update={"id": str(uuid.uuid4())})
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            await table.put_item(
                Item=self._plan_to_item(stored),
                ConditionExpression="attribute_not_exists(id)",
            )
        return stored
    
    async def get_plan(self, plan_id: str) -> ReadingPlan:
        """Retrieve a plan by ID from DynamoDB.
        
        Args:
            plan_id: The unique identifier of the plan.
            
        Returns:
            ReadingPlan: The plan entity.
            
        Raises:
            ValueError: If the plan is not found.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            response = await table.get_item(Key={"id": plan_id}, ConsistentRead=True)
            
            if "Item" not in response:
                raise ValueError(f"Plan with id {plan_id} not found")
            
            return self._item_to_plan(response["Item"])
    
    async def update_plan(self, plan_id: str, patch: PlanPatch) -> ReadingPlan:
        """Apply a patch to a stored plan in a single conditional update.
        
        Args:
            plan_id: The unique identifier of the plan.
            patch: The deltas and field changes to apply.
            
        Returns:
            ReadingPlan: The plan as stored after the update.
            
        Raises:
            ValueError: If the plan is not found.
        """
        kwargs = self.patch_to_update(patch)
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            try:
                response = await table.update_item(
                    Key={"id": plan_id},
                    ConditionExpression="attribute_exists(id)",
                    ReturnValues="ALL_NEW",
                    **kwargs,
                )
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                    raise ValueError(f"Plan with id {plan_id} not found") from e
                raise
            
            return self._item_to_plan(response["Attributes"])
    
    async def transition_status(
        self,
        plan_id: str,
        from_status: PlanStatus,
        to_status: PlanStatus,
    ) -> Optional[ReadingPlan]:
        """Change a plan's status with a write conditional on its current status.
        
        Returns:
            ReadingPlan: The updated plan, or None if the status differed or
            the plan does not exist.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            try:
                response = await table.update_item(
                    Key={"id": plan_id},
                    UpdateExpression="SET #status = :to_status",
                    ConditionExpression="attribute_exists(id) AND #status = :from_status",
                    # status is a DynamoDB reserved word
                    ExpressionAttributeNames={"#status": "status"},
                    ExpressionAttributeValues={
                        ":from_status": from_status.value,
                        ":to_status": to_status.value,
                    },
                    ReturnValues="ALL_NEW",
                )
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                    return None
                raise
            
            return self._item_to_plan(response["Attributes"])
    
    async def list_plans(self, user_id: str) -> list[ReadingPlan]:
        """List the plans owned by a user through the user index.
        
        Returns:
            list[ReadingPlan]: The user's plans, oldest first.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            query = {
                "IndexName": self.user_index_name,
                "KeyConditionExpression": Key("user_id").eq(user_id),
            }
            response = await table.query(**query)
            items = list(response.get("Items", []))
            
            # Handle pagination if there are more items
            while "LastEvaluatedKey" in response:
                response = await table.query(ExclusiveStartKey=response["LastEvaluatedKey"], **query)
                items.extend(response.get("Items", []))
        
        plans = [self._item_to_plan(item) for item in items]
        return sorted(plans, key=lambda plan: plan.created_at)
    
    def patch_to_update(self, patch: PlanPatch) -> Dict[str, Any]:
        """Build the update expression and values for a patch.
        
        Also used by the transactional progress writer.
        
        Args:
            patch: The patch to translate.
            
        Returns:
            Dict: UpdateExpression and ExpressionAttributeValues.
        """
        values: Dict[str, Any] = {
            ":pages": patch.pages_delta,
            ":minutes": patch.minutes_delta,
        }
        expression = "ADD current_page :pages, minutes_spent :minutes"
        if patch.last_read_at is not None:
            values[":last_read_at"] = patch.last_read_at.isoformat()
            expression = "SET last_read_at = :last_read_at " + expression
        
        return {
            "UpdateExpression": expression,
            "ExpressionAttributeValues": values,
        }
    
    def _plan_to_item(self, plan: ReadingPlan) -> Dict[str, Any]:
        """Convert a ReadingPlan entity to a DynamoDB item.
        
        Args:
            plan: The plan entity.
            
        Returns:
            Dict: The DynamoDB item representation.
        """
        item = {
            "id": plan.id,
            "user_id": plan.user_id,
            "book_id": plan.book_id,
            "title": plan.title,
            "start_date": plan.start_date.isoformat(),
            "end_date": plan.end_date.isoformat(),
            "goal_mode": plan.goal_mode.value,
            "daily_goal": plan.daily_goal,
            "total_pages": plan.total_pages,
            "current_page": plan.current_page,
            "minutes_spent": plan.minutes_spent,
            "status": plan.status.value,
            "created_at": plan.created_at.isoformat(),
        }
        if plan.last_read_at is not None:
            item["last_read_at"] = plan.last_read_at.isoformat()
        return item
    
    def _item_to_plan(self, item: Dict[str, Any]) -> ReadingPlan:
        """Convert a DynamoDB item to a ReadingPlan entity.
        
        Numbers come back from DynamoDB as ``Decimal``.
        
        Args:
            item: The DynamoDB item.
            
        Returns:
            ReadingPlan: The plan entity.
        """
        last_read_at: Optional[str] = item.get("last_read_at")
        return ReadingPlan(
            id=item["id"],
            user_id=item["user_id"],
            book_id=item["book_id"],
            title=item["title"],
            start_date=date.fromisoformat(item["start_date"]),
            end_date=date.fromisoformat(item["end_date"]),
            goal_mode=GoalMode(item.get("goal_mode", GoalMode.PAGES_PER_DAY.value)),
            daily_goal=int(item["daily_goal"]),
            total_pages=int(item.get("total_pages", 0)),
            current_page=int(item.get("current_page", 0)),
            minutes_spent=int(item.get("minutes_spent", 0)),
            status=PlanStatus(item["status"]),
            last_read_at=datetime.fromisoformat(last_read_at) if last_read_at else None,
            created_at=datetime.fromisoformat(item["created_at"]),
        )
