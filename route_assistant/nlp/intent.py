"""Intent detection for travel assistant messages.

This module implements a rule-based intent classifier. Every intent owns
an ordered tuple of independent pattern rules; an intent's raw score is
the number of its rules that match, and location entities boost the
travel search intent.

Example
-------
    >>> classify_intent("Hello!").intent
    <Intent.GREETING: 'greeting'>
    >>> classify_intent("How much does it cost?").intent
    <Intent.PRICE_QUERY: 'price_query'>
    >>> classify_intent("I'll take option 2").intent
    <Intent.SELECT_ROUTE: 'select_route'>
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..domain.models import Entities, Intent, IntentResult
from .rules import Rule, count_matches, normalize, pattern_rule

LOCATION_BOOST = 2
CONFIDENCE_SCALE = 3

# Declaration order is the tie-break: on equal scores the earlier intent wins.
INTENT_RULES: Tuple[Tuple[Intent, Tuple[Rule[Intent], ...]], ...] = (
    (
        Intent.GREETING,
        (
            pattern_rule(
                r"^(hi|hello|hey|howdy|hola|good\s*(morning|afternoon|evening|day)"
                r"|namaste|namaskar)",
                Intent.GREETING,
            ),
            pattern_rule(r"^(what'?s?\s*up|yo|sup)", Intent.GREETING),
        ),
    ),
    (
        Intent.GOODBYE,
        (
            pattern_rule(
                r"\b(bye|goodbye|see\s*you|take\s*care|ciao|later|ttyl)\b", Intent.GOODBYE
            ),
        ),
    ),
    (
        Intent.THANKS,
        (
            pattern_rule(
                r"\b(thanks?|thank\s*you|thx|ty|appreciate|grateful|dhanyavaad)\b",
                Intent.THANKS,
            ),
        ),
    ),
    (
        Intent.HELP,
        (
            pattern_rule(
                r"\b(help|assist|support|how\s*(do|can|to)|what\s*can\s*you|guide|tutorial)\b",
                Intent.HELP,
            ),
            pattern_rule(r"\bwhat\s*(do|can)\s*you\s*do\b", Intent.HELP),
        ),
    ),
    (
        Intent.PRICE_QUERY,
        (
            pattern_rule(
                r"\b(how\s*much|price|cost|fare|charge|rate|ticket\s*price"
                r"|expensive|cheap|budget)\b",
                Intent.PRICE_QUERY,
            ),
        ),
    ),
    (
        Intent.SCHEDULE_QUERY,
        (
            pattern_rule(
                r"\b(when|what\s*time|schedule|timing|departure|arrival"
                r"|next\s*(train|bus)|timetable)\b",
                Intent.SCHEDULE_QUERY,
            ),
        ),
    ),
    (
        Intent.COMPARE_ROUTES,
        (
            pattern_rule(
                r"\b(compare|comparison|difference|vs|versus"
                r"|which\s*is\s*(better|faster|cheaper)|between)\b",
                Intent.COMPARE_ROUTES,
            ),
        ),
    ),
    (
        Intent.SELECT_ROUTE,
        (
            pattern_rule(
                r"\b(select|choose|book|pick|go\s*with|option\s*\d"
                r"|i('ll|\s*will)\s*(take|choose|go\s*with))\b",
                Intent.SELECT_ROUTE,
            ),
            pattern_rule(r"(\bnumber|#)\s*\d\b", Intent.SELECT_ROUTE),
        ),
    ),
    (
        Intent.ROUTE_PREFERENCE,
        (
            pattern_rule(
                r"\b(prefer|want|looking\s*for|need\s*a?|fastest|cheapest|quickest"
                r"|comfortable|direct)\b",
                Intent.ROUTE_PREFERENCE,
            ),
        ),
    ),
    (
        Intent.TRAVEL_SEARCH,
        (
            pattern_rule(
                r"\b(travel|go|going|trip|journey|route|from|to\b.*\bto\b|book"
                r"|find\s*(a\s*)?(bus|train|route|trip))",
                Intent.TRAVEL_SEARCH,
            ),
            pattern_rule(r"\b(bus|train|flight)\s*(from|to|between)\b", Intent.TRAVEL_SEARCH),
            pattern_rule(r"\bfrom\s+\w+\s+to\s+\w+", Intent.TRAVEL_SEARCH),
            pattern_rule(
                r"\b(i\s*(want|need|have)\s*to\s*(go|travel|reach|visit|get\s*to))\b",
                Intent.TRAVEL_SEARCH,
            ),
            pattern_rule(r"\btake\s*me\s*(to|from)\b", Intent.TRAVEL_SEARCH),
        ),
    ),
)


def score_intents(text: str, entities: Optional[Entities] = None) -> Tuple[Tuple[Intent, int], ...]:
    """Return the raw score of every intent, in declaration order.

    Args:
        text: The raw user message.
        entities: Merged entities; a known origin or destination adds
            LOCATION_BOOST to the travel search score.
    """
    normalized = normalize(text)
    boosted = entities is not None and entities.has_location

    scores = []
    for intent, rules in INTENT_RULES:
        score = count_matches(rules, normalized)
        if boosted and intent is Intent.TRAVEL_SEARCH:
            score += LOCATION_BOOST
        scores.append((intent, score))
    return tuple(scores)


def classify_intent(text: str, entities: Optional[Entities] = None) -> IntentResult:
    """Classify the intent of a message.

    The first intent reaching a strictly greater score wins. With no
    matching rule the result is UNKNOWN, unless a location entity is
    known, in which case the message is treated as a travel search.

    Args:
        text: The raw user message.
        entities: Merged entities for the current session, if any.

    Returns:
        IntentResult with confidence = min(score / 3, 1).
    """
    best_intent = Intent.UNKNOWN
    best_score = 0

    for intent, score in score_intents(text, entities):
        if score > best_score:
            best_intent = intent
            best_score = score

    if best_score <= 0 and entities is not None and entities.has_location:
        best_intent = Intent.TRAVEL_SEARCH

    confidence = min(best_score / CONFIDENCE_SCALE, 1.0)
    return IntentResult(intent=best_intent, confidence=confidence, raw_score=best_score)
