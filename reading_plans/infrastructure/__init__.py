"""Infrastructure layer components."""

from .dynamodb_book_provider import DynamoDBBookProvider
from .dynamodb_plan_store import DynamoDBPlanStore
from .dynamodb_progress_writer import DynamoDBProgressWriter
from .dynamodb_session_store import DynamoDBSessionStore
from .local_book_provider import LocalBookProvider
from .local_plan_store import LocalPlanStore
from .local_progress_writer import LocalProgressWriter
from .local_session_store import LocalSessionStore

__all__ = [
    "DynamoDBBookProvider",
    "DynamoDBPlanStore",
    "DynamoDBProgressWriter",
    "DynamoDBSessionStore",
    "LocalBookProvider",
    "LocalPlanStore",
    "LocalProgressWriter",
    "LocalSessionStore",
]
