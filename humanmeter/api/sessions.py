"""
HumanMeter — Session Registry

Maps client session ids to independent AnalysisSession histories for the
HTTP surface. Sessions are created by the routes that write to them; read-only
routes look a session up without creating it. When the registry is
full, the least recently used session is evicted.
"""

from __future__ import annotations

import threading
from collections import OrderedDict

import structlog

from humanmeter.engine.session import AnalysisSession

logger = structlog.get_logger("humanmeter.api.sessions")


class SessionRegistry:
    def __init__(self, max_sessions: int = 1000) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._max = max_sessions
        self._sessions: OrderedDict[str, AnalysisSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str) -> AnalysisSession | None:
        """Existing session or None; never creates one."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
            return session

    def get_or_create(self, session_id: str) -> AnalysisSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            session = AnalysisSession(session_id)
            self._sessions[session_id] = session
            logger.info("session_created", session_id=session_id, live_sessions=len(self._sessions))

            while len(self._sessions) > self._max:
                evicted_id, evicted = self._sessions.popitem(last=False)
                logger.info("session_evicted", session_id=evicted_id, records=len(evicted))
            return session

    def drop(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None
