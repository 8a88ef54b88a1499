"""NLP ports - Abstractions for entity extraction and intent classification.

These protocols define the contracts for the understanding stage of the
pipeline so that the rule-based implementations can be swapped without
changing the dialogue logic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Entities, IntentResult


class EntityExtractorPort(Protocol):
    """Port for slot extraction from text.

    Implementation: adapters/nlp/rule_based.py
    """

    def extract(self, text: str, prior: Optional[Entities] = None) -> Entities:
        """Extract slots from text and merge them over prior context.

        Args:
            text: The raw user message.
            prior: Entities accumulated in earlier turns, if any.

        Returns:
            The merged Entities.
        """
        ...


class IntentClassifierPort(Protocol):
    """Port for intent classification.

    Implementation: adapters/nlp/intent_adapter.py
    """

    def classify(self, text: str, entities: Optional[Entities] = None) -> IntentResult:
        """Classify the intent of a message.

        Args:
            text: The raw user message.
            entities: Merged entities, used to boost travel intents.

        Returns:
            IntentResult with the winning intent and a confidence.
        """
        ...
