"""Session store for OAuth-authenticated frontend sessions.

The store is owned by the application and injected into request
handlers. Expiry is checked lazily: an expired session is deleted when
it is looked up, and sweep_expired() clears the rest in one pass.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from adscore.core.identity import new_session_id, redact
from adscore.models.domain import SessionEntity

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=24)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore(ABC):
    """Capability interface for session storage."""

    @abstractmethod
    def get(self, session_id: str) -> SessionEntity | None:
        """Return the live session, or None if unknown or expired."""

    @abstractmethod
    def put(self, session: SessionEntity) -> None:
        """Store or replace a session."""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Remove a session. Returns True if it existed."""

    @abstractmethod
    def sweep_expired(self) -> int:
        """Remove all expired sessions. Returns how many were removed."""

    def create(self, tokens: dict[str, Any]) -> SessionEntity:
        """Create and store a new session for the given token payload."""
        session = SessionEntity(
            session_id=new_session_id(),
            created_at=self.now(),
            tokens=dict(tokens),
        )
        self.put(session)
        return session

    def now(self) -> datetime:
        return utc_now()


class InMemorySessionStore(SessionStore):
    """Process-local session store with a fixed TTL.

    A session created at T is valid while now - T < ttl.
    """

    def __init__(self, ttl: timedelta = DEFAULT_SESSION_TTL, clock: Clock = utc_now):
        """Initialize store.

        Args:
            ttl: Session lifetime.
            clock: Callable returning the current time; injectable for tests.
        """
        self.ttl = ttl
        self._clock = clock
        self._sessions: dict[str, SessionEntity] = {}
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return self._clock()

    def _is_expired(self, session: SessionEntity, now: datetime) -> bool:
        return now - session.created_at >= self.ttl

    def get(self, session_id: str) -> SessionEntity | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._is_expired(session, self.now()):
                del self._sessions[session_id]
                logger.info(f"Session {redact(session_id)} expired")
                return None
            return session

    def put(self, session: SessionEntity) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def sweep_expired(self) -> int:
        with self._lock:
            now = self.now()
            expired = [sid for sid, s in self._sessions.items() if self._is_expired(s, now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info(f"Swept {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
