import hashlib
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator

from .errors import SessionNotFoundError
from .models import Session
from .utils.logger import get_logger

def new_session_id() -> str:
    """Return a fresh 64-character hex identifier."""
    return hashlib.sha256(uuid.uuid4().bytes).hexdigest()

class SessionStore:
    """In-memory sessions keyed by identifier, one lock per session.

    Sessions only come into existence through ``create``; looking up an
    unknown identifier raises ``SessionNotFoundError``. With a positive
    ``ttl_seconds`` a session idle for longer is dropped on next access.
    """

    def __init__(self, ttl_seconds: float = 0):
        self.ttl_seconds = ttl_seconds
        self._sessions: Dict[str, Session] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._last_seen: Dict[str, float] = {}
        self._guard = threading.Lock()
        self.logger = get_logger(__name__)

    def create(self, session_id: str) -> Session:
        session = Session()
        with self._guard:
            self._sessions[session_id] = session
            self._locks[session_id] = threading.Lock()
            self._last_seen[session_id] = time.time()
        self.logger.info(f"Created session {session_id[:12]}")
        return session

    def get(self, session_id: str) -> Session:
        with self._guard:
            self._purge_expired()
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            self._last_seen[session_id] = time.time()
            return session

    @contextmanager
    def checkout(self, session_id: str) -> Iterator[Session]:
        """Hold the session's lock for one turn so turns on the same id never interleave."""
        with self._guard:
            lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFoundError(session_id)
        with lock:
            yield self.get(session_id)

    def _purge_expired(self) -> None:
        if self.ttl_seconds <= 0:
            return
        now = time.time()
        expired = [k for k, seen in self._last_seen.items() if now - seen > self.ttl_seconds]
        for k in expired:
            self._sessions.pop(k, None)
            self._locks.pop(k, None)
            self._last_seen.pop(k, None)
            self.logger.info(f"Session {k[:12]} expired")

    def __contains__(self, session_id: str) -> bool:
        with self._guard:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._guard:
            return len(self._sessions)
