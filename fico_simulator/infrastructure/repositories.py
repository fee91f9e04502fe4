"""In-memory storage for open simulation sessions"""

import threading
import uuid
from collections import OrderedDict
from typing import Optional

from fico_simulator.config import settings
from fico_simulator.domain.exceptions import SessionNotFoundError
from fico_simulator.domain.simulator import SimulationSession
from fico_simulator.infrastructure.observability.metrics import active_sessions_gauge


class SessionRepository:
    """
    Repository for simulation sessions.

    Sessions are transient: nothing is persisted, and once max_sessions is
    reached the oldest session is evicted to make room.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions or settings.max_sessions
        self._sessions: "OrderedDict[str, SimulationSession]" = OrderedDict()
        self._lock = threading.Lock()

    def add(self, session: SimulationSession) -> str:
        """Store a session and return its generated id"""
        session_id = uuid.uuid4().hex
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                self._sessions.popitem(last=False)
            self._sessions[session_id] = session
            active_sessions_gauge.set(len(self._sessions))
        return session_id

    def get(self, session_id: str) -> SimulationSession:
        """
        Fetch a session by id.

        Raises:
            SessionNotFoundError: No session with this id (never created, closed or evicted)
        """
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
            active_sessions_gauge.set(len(self._sessions))

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
