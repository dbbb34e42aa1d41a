"""Domain interfaces for the reading plan engine."""

from .book_provider import BookProvider
from .plan_store import PlanStore
from .progress_writer import ProgressWriter
from .session_store import SessionStore

__all__ = ["BookProvider", "PlanStore", "ProgressWriter", "SessionStore"]
