"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the dialogue pipeline to:
- Rule-based NLP (entity extraction, intent classification)
- Route data (CSV catalog)
- Session storage (in-memory with eviction)
- Turn logging (in-memory, null)
- Rendering (Markdown)
"""
