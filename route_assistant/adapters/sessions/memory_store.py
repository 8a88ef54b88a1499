"""Thread-safe in-memory session store.

This store replaces a process-wide session map that grew without bound.
It keeps the dialogue state of every live session and evicts:
- the least recently used session when max_sessions is reached
- sessions idle for longer than ttl_seconds, on their next access

Key properties:
- Thread-safe with RLock (per-map operations only)
- Optional LRU and TTL eviction, both disabled with None
- Statistics tracking
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from ...domain.models import DEFAULT_HISTORY_CAPACITY, Session

# Cap used when a store is built without explicit configuration.
DEFAULT_MAX_SESSIONS = 10_000


@dataclass
class InMemorySessionStore:
    """In-memory session store with LRU and idle TTL eviction.

    This store implements the SessionStorePort protocol.

    Attributes:
        max_sessions: Maximum number of live sessions (None = unlimited)
        ttl_seconds: Idle time after which a session expires (None = never)
        history_capacity: History size of newly created sessions
        clock: Time source in seconds

    Example:
        store = InMemorySessionStore(max_sessions=1000, ttl_seconds=1800)
        session = store.get_or_create("user-42")
    """

    max_sessions: Optional[int] = None
    ttl_seconds: Optional[float] = None
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    clock: Callable[[], float] = field(default=time.time, repr=False)

    _store: "OrderedDict[str, Tuple[Session, float]]" = field(
        default_factory=OrderedDict, repr=False
    )
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _created: int = field(default=0, repr=False)
    _evicted: int = field(default=0, repr=False)
    _expired: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def get(self, session_id: str) -> Optional[Session]:
        """Get a session from the store.

        Args:
            session_id: The session key.

        Returns:
            The session, or None if not found or expired.
        """
        with self._lock:
            entry = self._store.get(session_id)
            if entry is None:
                return None

            session, last_access = entry
            now = self.clock()
            if self.ttl_seconds is not None and now - last_access > self.ttl_seconds:
                del self._store[session_id]
                self._expired += 1
                self._logger.debug("Session expired", extra={"session_id": session_id})
                return None

            self._store[session_id] = (session, now)
            self._store.move_to_end(session_id)
            return session

    def get_or_create(self, session_id: str) -> Session:
        """Get a session, creating a fresh one on first reference.

        Args:
            session_id: The session key.

        Returns:
            The existing or newly created session.
        """
        with self._lock:
            session = self.get(session_id)
            if session is not None:
                return session

            session = Session.create(session_id, history_capacity=self.history_capacity)
            self._put(session)
            self._created += 1
            self._logger.debug("Session created", extra={"session_id": session_id})
            return session

    def update(self, session: Session) -> None:
        """Store a session, replacing any previous state under its id.

        Args:
            session: The session to commit.
        """
        with self._lock:
            self._put(session)

    def _put(self, session: Session) -> None:
        session_id = session.session_id
        if (
            self.max_sessions is not None
            and session_id not in self._store
            and len(self._store) >= self.max_sessions
        ):
            oldest_id, _ = self._store.popitem(last=False)
            self._evicted += 1
            self._logger.debug(
                "Session evicted",
                extra={"session_id": oldest_id, "reason": "max_sessions"},
            )

        self._store[session_id] = (session, self.clock())
        self._store.move_to_end(session_id)

    def remove(self, session_id: str) -> bool:
        """Remove a session.

        Args:
            session_id: The session key.

        Returns:
            True if the session existed and was removed.
        """
        with self._lock:
            if session_id in self._store:
                del self._store[session_id]
                self._logger.debug("Session removed", extra={"session_id": session_id})
                return True
            return False

    def size(self) -> int:
        """Return the number of sessions currently held.

        Expired sessions still count until they are next accessed.
        """
        with self._lock:
            return len(self._store)

    def clear(self) -> int:
        """Remove all sessions.

        Returns:
            Number of sessions that were removed.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._logger.info("Session store cleared", extra={"sessions_cleared": count})
            return count

    def stats(self) -> Dict[str, Any]:
        """Return store statistics.

        Returns:
            Dictionary with size, creation and eviction counts.
        """
        with self._lock:
            return {
                "size": len(self._store),
                "created": self._created,
                "evicted": self._evicted,
                "expired": self._expired,
            }

    def session_ids(self) -> list[str]:
        """Return session ids from least to most recently used."""
        with self._lock:
            return list(self._store.keys())
