"""Session store adapters - Implementations of the SessionStorePort.

Available implementations:
- InMemorySessionStore: Thread-safe in-memory store with LRU and TTL eviction
"""

from .memory_store import InMemorySessionStore

__all__ = ["InMemorySessionStore"]
