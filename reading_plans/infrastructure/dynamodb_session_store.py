"""DynamoDB implementation of Session Store."""

from datetime import datetime
from typing import Any, Dict, Optional

import aioboto3
from boto3.dynamodb.conditions import Attr, Key

from ..domain.entities.reading_session import ReadingSession
from ..domain.interfaces.session_store import SessionStore


class DynamoDBSessionStore(SessionStore):
    """DynamoDB append-only store for reading sessions."""
    
    def __init__(
        self,
        table_name: str,
        region_name: str = "us-east-1",
        plan_index_name: str = "plan_id-index",
        user_index_name: str = "user_id-index",
    ):
        """Initialize the DynamoDB session store.
        
        Args:
            table_name: The name of the DynamoDB table.
            region_name: AWS region name (default: us-east-1).
            plan_index_name: Global secondary index keyed on ``plan_id``.
            user_index_name: Global secondary index keyed on ``user_id``.
        """
        self.table_name = table_name
        self.region_name = region_name
        self.plan_index_name = plan_index_name
        self.user_index_name = user_index_name
        self._session = aioboto3.Session()
    
    async def append_session(self, session: ReadingSession) -> ReadingSession:
        """Append a session to DynamoDB.
        
        The write is conditional on the id being new, so a session is never
        overwritten.
        
        Args:
            session: The session entity to append.
            
        Returns:
            ReadingSession: The stored session.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            await table.put_item(
                Item=self.session_to_item(session),
                ConditionExpression="attribute_not_exists(id)",
            )
        return session
    
    async def list_sessions(
        self,
        plan_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> list[ReadingSession]:
        """List sessions by plan and/or user.
        
        Queries the plan index when a plan is given, the user index when
        only a user is given, and scans otherwise.
        
        Returns:
            list[ReadingSession]: Matching sessions, oldest first.
        """
        if plan_id is not None:
            request = {
                "IndexName": self.plan_index_name,
                "KeyConditionExpression": Key("plan_id").eq(plan_id),
            }
            if user_id is not None:
                request["FilterExpression"] = Attr("user_id").eq(user_id)
        elif user_id is not None:
            request = {
                "IndexName": self.user_index_name,
                "KeyConditionExpression": Key("user_id").eq(user_id),
            }
        else:
            request = {}
        
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            read = table.query if request.get("IndexName") else table.scan
            response = await read(**request)
            items = list(response.get("Items", []))
            
            # Handle pagination if there are more items
            while "LastEvaluatedKey" in response:
                response = await read(ExclusiveStartKey=response["LastEvaluatedKey"], **request)
                items.extend(response.get("Items", []))
        
        sessions = [self._item_to_session(item) for item in items]
        return sorted(sessions, key=lambda session: session.created_at)
    
    def session_to_item(self, session: ReadingSession) -> Dict[str, Any]:
        """Convert a ReadingSession entity to a DynamoDB item.
        
        Also used by the transactional progress writer. Optional attributes
        are left out instead of being stored as null, since index key
        attributes cannot be null.
        
        Args:
            session: The session entity.
            
        Returns:
            Dict: The DynamoDB item representation.
        """
        item = {
            "id": session.id,
            "book_id": session.book_id,
            "pages_read": session.pages_read,
            "minutes_spent": session.minutes_spent,
            "koach_earned": session.koach_earned,
            "created_at": session.created_at.isoformat(),
        }
        for name in ("user_id", "plan_id", "notes"):
            value = getattr(session, name)
            if value is not None:
                item[name] = value
        return item
    
    def _item_to_session(self, item: Dict[str, Any]) -> ReadingSession:
        """Convert a DynamoDB item to a ReadingSession entity.
        
        Args:
            item: The DynamoDB item.
            
        Returns:
            ReadingSession: The session entity.
        """
        return ReadingSession(
            id=item["id"],
            user_id=item.get("user_id"),
            book_id=item["book_id"],
            plan_id=item.get("plan_id"),
            pages_read=int(item["pages_read"]),
            minutes_spent=int(item.get("minutes_spent", 0)),
            koach_earned=int(item.get("koach_earned", 0)),
            notes=item.get("notes"),
            created_at=datetime.fromisoformat(item["created_at"]),
        )
