"""Session manager for translation sessions driven over the API."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...session.tracker import Fetcher, Persister, SessionTracker


@dataclass
class ManagedSession:
    """A tracker plus bookkeeping."""
    session_id: str
    tracker: SessionTracker
    created_at: str


class SessionManager:
    """Keeps one SessionTracker per session id."""

    def __init__(self, fetcher: Fetcher, persister: Optional[Persister] = None):
        self.fetcher = fetcher
        self.persister = persister
        self.sessions: dict[str, ManagedSession] = {}

    def create_session(self) -> ManagedSession:
        """Create a new idle session."""
        session_id = str(uuid.uuid4())
        session = ManagedSession(
            session_id=session_id,
            tracker=SessionTracker(self.fetcher, self.persister),
            created_at=datetime.now().isoformat(),
        )
        self.sessions[session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[ManagedSession]:
        """Get a session by ID."""
        return self.sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Forget a session."""
        session = self.sessions.pop(session_id, None)
        if session:
            session.tracker.reset_session()
            return True
        return False

    def list_sessions(self) -> list[ManagedSession]:
        """List sessions, newest first."""
        sessions = list(self.sessions.values())
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions

    async def drain(self) -> None:
        """Wait for every session's pending store writes."""
        for session in list(self.sessions.values()):
            await session.tracker.drain()
