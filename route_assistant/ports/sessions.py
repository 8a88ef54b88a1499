"""Session store port - Injectable storage for dialogue state.

Replaces a process-wide session map with no eviction: implementations
decide how long idle sessions live and how many are kept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Session


class SessionStorePort(Protocol):
    """Port for session storage.

    Implementation: adapters/sessions/memory_store.py (InMemorySessionStore)
    """

    def get(self, session_id: str) -> Optional[Session]:
        """Return the session, or None if absent or evicted."""
        ...

    def get_or_create(self, session_id: str) -> Session:
        """Return the session, creating a fresh one on first reference."""
        ...

    def update(self, session: Session) -> None:
        """Store a session, replacing any previous state under its id."""
        ...

    def remove(self, session_id: str) -> bool:
        """Remove a session.

        Returns:
            True if the session existed and was removed.
        """
        ...

    def size(self) -> int:
        """Return the number of live sessions."""
        ...

    def clear(self) -> int:
        """Remove all sessions.

        Returns:
            Number of sessions that were removed.
        """
        ...
