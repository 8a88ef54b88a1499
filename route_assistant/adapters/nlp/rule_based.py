"""Rule-based entity extractor adapter.

This adapter wraps the pattern-driven extraction logic from
nlp/entities.py with the EntityExtractorPort interface and supplies the
reference day for relative dates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from ...domain.models import Entities
from ...nlp.entities import extract_entities


@dataclass
class RuleBasedEntityExtractor:
    """Rule-based entity extractor.

    Attributes:
        clock: Returns the reference day for 'today', 'tomorrow', weekdays...
    """

    clock: Callable[[], date] = date.today
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def extract(self, text: str, prior: Optional[Entities] = None) -> Entities:
        """Extract slots from text and merge them over prior context.

        Args:
            text: The raw user message.
            prior: Entities accumulated in earlier turns, if any.

        Returns:
            The merged Entities.
        """
        merged = extract_entities(text, prior, today=self.clock())

        self._logger.debug(
            "Entities extracted",
            extra={
                "text_length": len(text),
                "slots": sorted(merged.to_dict()),
                "has_prior": prior is not None,
            },
        )

        return merged
