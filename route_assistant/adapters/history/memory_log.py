"""Thread-safe in-memory turn log.

Keeps every turn of every session in append order. Unlike the bounded
session history, the log is never truncated by the dialogue pipeline;
it is cleared explicitly or dropped with the process.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ...domain.errors import TurnLogError
from ...domain.models import Turn

_ROLES = ("user", "assistant")


@dataclass
class InMemoryTurnLog:
    """In-memory implementation of the TurnLogPort protocol.

    Attributes:
        name: Log name for logging
    """

    name: str = "turns"

    _turns: Dict[str, List[Turn]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def append_turn(
        self,
        session_id: str,
        role: str,
        content: str,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Append one turn to the session's log.

        Raises:
            TurnLogError: If the role is not 'user' or 'assistant'.
        """
        if role not in _ROLES:
            raise TurnLogError(
                f"Invalid turn role: {role!r}",
                session_id=session_id,
            )

        turn = Turn(role=role, content=content, metadata=dict(metadata or {}))
        with self._lock:
            self._turns.setdefault(session_id, []).append(turn)

        self._logger.debug(
            "Turn appended",
            extra={"session_id": session_id, "role": role},
        )

    def load_history(self, session_id: str) -> List[Turn]:
        """Return a copy of the session's turns in append order."""
        with self._lock:
            return list(self._turns.get(session_id, ()))

    def clear(self, session_id: Optional[str] = None) -> int:
        """Drop logged turns.

        Args:
            session_id: Session to clear, or None to clear every session.

        Returns:
            Number of turns that were dropped.
        """
        with self._lock:
            if session_id is not None:
                return len(self._turns.pop(session_id, ()))
            count = sum(len(turns) for turns in self._turns.values())
            self._turns.clear()
            return count

    def session_ids(self) -> List[str]:
        with self._lock:
            return list(self._turns.keys())
