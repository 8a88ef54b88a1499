"""Rule-based language understanding for travel messages.

- entities: slot extraction (locations, mode, date, time, seat, budget)
- intent: intent scoring over ordered rule tables
- cities / dates: resolution helpers used by the extractor
"""

from .cities import known_cities, resolve_city
from .entities import extract_entities, extract_locations, merge_with_context
from .intent import classify_intent, score_intents

__all__ = [
    "classify_intent",
    "extract_entities",
    "extract_locations",
    "known_cities",
    "merge_with_context",
    "resolve_city",
    "score_intents",
]
