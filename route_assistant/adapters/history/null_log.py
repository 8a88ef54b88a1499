"""Null turn log implementation for testing.

This log discards every turn, so tests that only care about decisions
don't accumulate state between runs.

Example:
    orchestrator = DialogueOrchestrator(..., turn_log=NullTurnLog())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from ...domain.models import Turn


@dataclass
class NullTurnLog:
    """No-op turn log - stores nothing, always returns an empty history."""

    name: str = "null"

    def append_turn(
        self,
        session_id: str,
        role: str,
        content: str,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Does nothing."""
        pass

    def load_history(self, session_id: str) -> List[Turn]:
        """Always returns an empty list."""
        return []
