"""Turn log port - Durable append-only log of conversation turns.

The log is a best-effort side channel: the dialogue orchestrator never
lets a failing append change the response it returns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Turn


class TurnLogPort(Protocol):
    """Port for turn persistence.

    Implementations:
    - adapters/history/memory_log.py (InMemoryTurnLog)
    - adapters/history/null_log.py (NullTurnLog) - Testing
    """

    def append_turn(
        self,
        session_id: str,
        role: str,
        content: str,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Append one turn to the session's log.

        Args:
            session_id: The session the turn belongs to.
            role: 'user' or 'assistant'.
            content: The message content.
            metadata: Optional structured metadata (intent, entities, ...).

        Raises:
            TurnLogError: If the turn could not be stored.
        """
        ...

    def load_history(self, session_id: str) -> Sequence[Turn]:
        """Return the logged turns of a session in append order.

        Args:
            session_id: The session to read.

        Returns:
            Ordered sequence of turns (empty for an unknown session).
        """
        ...
