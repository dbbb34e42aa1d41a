"""DynamoDB implementation of Progress Writer."""

from typing import Any, Dict

import aioboto3
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from ..domain.entities.reading_plan import PlanPatch, ReadingPlan
from ..domain.entities.reading_session import ReadingSession
from ..domain.interfaces.progress_writer import ProgressWriter
from .dynamodb_plan_store import DynamoDBPlanStore
from .dynamodb_session_store import DynamoDBSessionStore


class DynamoDBProgressWriter(ProgressWriter):
    """Writes a session and its plan increment in one DynamoDB transaction.

    The plan ``ADD`` update and the session put go through
    ``transact_write_items``, so DynamoDB applies both or neither.
    """

    def __init__(self, plan_store: DynamoDBPlanStore, session_store: DynamoDBSessionStore):
        """Initialize the writer over the plans and sessions tables.

        Args:
            plan_store: Store for the plans table; also used to read the
                plan back after the transaction.
            session_store: Store for the sessions table.
        """
        self.plan_store = plan_store
        self.session_store = session_store
        self.region_name = plan_store.region_name
        self._session = aioboto3.Session()
        self._serializer = TypeSerializer()

    async def write_progress(
        self,
        plan_id: str,
        patch: PlanPatch,
        session: ReadingSession,
    ) -> ReadingPlan:
        """Apply the patch and append the session in a single transaction.

        Returns:
            ReadingPlan: The plan read back after the transaction.

        Raises:
            ValueError: If the plan is not found.
        """
        update = self.plan_store.patch_to_update(patch)
        transact_items = [
            {
                "Update": {
                    "TableName": self.plan_store.table_name,
                    "Key": self._serialize({"id": plan_id}),
                    "UpdateExpression": update["UpdateExpression"],
                    "ConditionExpression": "attribute_exists(id)",
                    "ExpressionAttributeValues": self._serialize(update["ExpressionAttributeValues"]),
                }
            },
            {
                "Put": {
                    "TableName": self.session_store.table_name,
                    "Item": self._serialize(self.session_store.session_to_item(session)),
                    "ConditionExpression": "attribute_not_exists(id)",
                }
            },
        ]

        async with self._session.client("dynamodb", region_name=self.region_name) as client:
            try:
                await client.transact_write_items(TransactItems=transact_items)
            except ClientError as e:
                if self._plan_check_failed(e):
                    raise ValueError(f"Plan with id {plan_id} not found") from e
                raise

        return await self.plan_store.get_plan(plan_id)

    def _serialize(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Convert plain values to the low-level attribute value format."""
        return {key: self._serializer.serialize(value) for key, value in values.items()}

    def _plan_check_failed(self, error: ClientError) -> bool:
        # Cancellation reasons are listed in TransactItems order; the plan update is first
        if error.response.get("Error", {}).get("Code") != "TransactionCanceledException":
            return False
        reasons = error.response.get("CancellationReasons", [])
        return bool(reasons) and reasons[0].get("Code") == "ConditionalCheckFailed"
