"""Session Store interface."""

from typing import Optional, Protocol, runtime_checkable

from ..entities.reading_session import ReadingSession


@runtime_checkable
class SessionStore(Protocol):
    """Append-only storage for reading sessions."""
    
    async def append_session(self, session: ReadingSession) -> ReadingSession:
        """Store a new session.
        
        Args:
            session: The session to append.
            
        Returns:
            ReadingSession: The stored session.
        """
        ...
    
    async def list_sessions(
        self,
        plan_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> list[ReadingSession]:
        """List sessions, optionally filtered by plan and/or user.
        
        Returns:
            list[ReadingSession]: Matching sessions, oldest first.
        """
        ...
