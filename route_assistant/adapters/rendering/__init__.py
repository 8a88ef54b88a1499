"""Rendering adapters - Implementations of DecisionRendererPort.

Available implementations:
- MarkdownDecisionRenderer: Markdown chat text for every decision kind
"""

from .markdown_renderer import MarkdownDecisionRenderer

__all__ = ["MarkdownDecisionRenderer"]
