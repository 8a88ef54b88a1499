"""Turn log adapters - Implementations of the TurnLogPort.

Available implementations:
- InMemoryTurnLog: Thread-safe in-memory log of every turn
- NullTurnLog: No-op log for testing
"""

from .memory_log import InMemoryTurnLog
from .null_log import NullTurnLog

__all__ = ["InMemoryTurnLog", "NullTurnLog"]
