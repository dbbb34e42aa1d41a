"""Local in-memory implementation of Session Store."""

from typing import Optional

from ..domain.entities.reading_session import ReadingSession
from ..domain.interfaces.session_store import SessionStore


class LocalSessionStore(SessionStore):
    """Local in-memory, append-only session store for testing and development."""
    
    def __init__(self):
        self._sessions: list[ReadingSession] = []
    
    async def append_session(self, session: ReadingSession) -> ReadingSession:
        """Append a session.
        
        Raises:
            ValueError: If a session with the same id was already stored.
        """
        if any(existing.id == session.id for existing in self._sessions):
            raise ValueError(f"Session with id {session.id} already exists")
        
        self._sessions.append(session)
        return session
    
    async def list_sessions(
        self,
        plan_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> list[ReadingSession]:
        return [
            session
            for session in self._sessions
            if (plan_id is None or session.plan_id == plan_id)
            and (user_id is None or session.user_id == user_id)
        ]
    
    def discard_session(self, session_id: str) -> None:
        """Remove a session whose plan progress could not be written."""
        self._sessions = [session for session in self._sessions if session.id != session_id]
