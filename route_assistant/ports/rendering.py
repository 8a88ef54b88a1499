"""Rendering port - Abstraction for turning decisions into display text.

The dialogue pipeline returns structured decisions only; front ends pick
a renderer to present them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import ResponseDecision


class DecisionRendererPort(Protocol):
    """Port for decision rendering.

    Implementation: adapters/rendering/markdown_renderer.py
    """

    def render(self, decision: ResponseDecision) -> str:
        """Render a decision as display text.

        Args:
            decision: The structured decision of a turn.

        Returns:
            Text ready to show to the user.
        """
        ...
