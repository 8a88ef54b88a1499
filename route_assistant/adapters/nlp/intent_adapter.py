"""Intent classification adapter.

This adapter wraps the rule-based intent scoring logic from
nlp/intent.py with the IntentClassifierPort interface.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.models import Entities, IntentResult
from ...nlp.intent import classify_intent


@dataclass
class RuleBasedIntentClassifier:
    """Rule-based intent classifier.

    This adapter implements IntentClassifierPort by wrapping the intent
    rule tables from nlp/intent.py.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def classify(self, text: str, entities: Optional[Entities] = None) -> IntentResult:
        """Classify the intent of a message.

        Args:
            text: The raw user message.
            entities: Merged entities, used to boost travel intents.

        Returns:
            IntentResult with the winning intent and a confidence.
        """
        result = classify_intent(text, entities)

        self._logger.debug(
            "Intent classified",
            extra={
                "text_length": len(text),
                "intent": result.intent.name,
                "confidence": result.confidence,
            },
        )

        return result
