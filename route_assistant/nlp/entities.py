"""Entity extraction from natural-language travel messages.

This module turns a raw user message into an Entities slot set and
merges it with the slots accumulated in earlier turns. Every category
is driven by an ordered rule table; the first rule that succeeds wins.

Example
-------
    >>> extract_entities("Find a train from Bombay to Poona").origin
    'Mumbai'
    >>> extract_entities("travel to pune", Entities(origin="Mumbai")).origin
    'Mumbai'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Tuple

from ..domain.models import BudgetPreference, Entities, SeatClass, TravelMode
from .cities import resolve_city
from .dates import extract_date, extract_time
from .rules import Rule, first_match, normalize, pattern_rule

_STOP = r"(?:by|on|in|at|tomorrow|today|next|this)"


@dataclass(frozen=True)
class LocationMatch:
    origin: Optional[str] = None
    destination: Optional[str] = None


def _from_to(match: re.Match) -> LocationMatch:
    return LocationMatch(resolve_city(match.group(1)), resolve_city(match.group(2)))


def _to_from(match: re.Match) -> LocationMatch:
    return LocationMatch(resolve_city(match.group(2)), resolve_city(match.group(1)))


def _destination_only(match: re.Match) -> LocationMatch:
    return LocationMatch(destination=resolve_city(match.group(1)))


def _origin_only(match: re.Match) -> LocationMatch:
    return LocationMatch(origin=resolve_city(match.group(1)))


@dataclass(frozen=True)
class LocationRule:
    """A location phrasing: regex, slot builder, and acceptance policy."""

    pattern: re.Pattern
    build: Callable[[re.Match], LocationMatch]
    require_both: bool = False

    def apply(self, text: str) -> Optional[LocationMatch]:
        match = self.pattern.search(text)
        if not match:
            return None
        found = self.build(match)
        if self.require_both:
            accepted = found.origin is not None and found.destination is not None
        else:
            accepted = found.origin is not None or found.destination is not None
        return found if accepted else None


# Tried in priority order; extraction stops at the first accepted rule.
LOCATION_RULES: Tuple[LocationRule, ...] = (
    LocationRule(
        re.compile(rf"from\s+([a-z\s]+?)\s+to\s+([a-z\s]+?)(?:\s+{_STOP}\b|\s*$)"),
        _from_to,
    ),
    LocationRule(
        re.compile(rf"([a-z\s]+?)\s+to\s+([a-z\s]+?)(?:\s+{_STOP}\b|\s*$)"),
        _from_to,
        require_both=True,
    ),
    LocationRule(
        re.compile(r"to\s+([a-z\s]+?)\s+from\s+([a-z\s]+?)(?:\s|$)"),
        _to_from,
    ),
    LocationRule(
        re.compile(
            r"(?:go|going|travel|reach|visit|get)\s+(?:to\s+)?([a-z\s]+?)"
            r"(?:\s+(?:by|on|in|at|from|tomorrow|today)\b|\s*$)"
        ),
        _destination_only,
    ),
    LocationRule(
        re.compile(r"from\s+([a-z\s]+?)(?:\s+(?:by|on|in|at|to|tomorrow|today)\b|\s*$)"),
        _origin_only,
    ),
)

MODE_RULES: Tuple[Rule[TravelMode], ...] = (
    pattern_rule(r"\b(trains?|railways?|rail|express|rajdhani|shatabdi)\b", TravelMode.TRAIN),
    pattern_rule(r"\b(bus|buses|volvo|sleeper|msrtc|rsrtc|ksrtc)\b", TravelMode.BUS),
    pattern_rule(r"\b(any|both|either|all)\s*(mode|transport|option)?\b", TravelMode.ANY),
)

SEAT_CLASS_RULES: Tuple[Rule[SeatClass], ...] = (
    pattern_rule(r"\b(first\s*class|1st\s*class|fc|1ac)\b", SeatClass.FIRST),
    pattern_rule(r"\b(second\s*class|2nd\s*class|2ac)\b", SeatClass.SECOND),
    pattern_rule(r"\b(sleeper|sl|3ac)\b", SeatClass.SLEEPER),
    pattern_rule(r"\b(ac|air\s*condition(ed|ing)?)\b", SeatClass.AC),
    pattern_rule(r"\b(general|gen|unreserved)\b", SeatClass.GENERAL),
)

BUDGET_RULES: Tuple[Rule[BudgetPreference], ...] = (
    pattern_rule(
        r"\b(cheap|budget|low\s*cost|affordable|economy|economical)\b",
        BudgetPreference.BUDGET,
    ),
    pattern_rule(r"\b(premium|luxury|comfortable|best|top|vip)\b", BudgetPreference.PREMIUM),
    pattern_rule(r"\b(moderate|balanced|mid|medium)\b", BudgetPreference.BALANCED),
)


def extract_locations(text: str) -> LocationMatch:
    """Extract origin and destination from normalized text.

    Args:
        text: Lowercased message text.

    Returns:
        LocationMatch with whichever slots the winning rule resolved.
    """
    for rule in LOCATION_RULES:
        found = rule.apply(text)
        if found is not None:
            return found
    return LocationMatch()


def merge_with_context(new: Entities, prior: Optional[Entities]) -> Entities:
    """Overlay newly extracted slots on prior context.

    A prior slot is only overwritten by a present new value; it is
    never cleared.
    """
    if prior is None:
        return new
    return prior.merged_with(new)


def extract_entities(
    text: str,
    prior: Optional[Entities] = None,
    today: Optional[date] = None,
) -> Entities:
    """Extract travel slots from a message and merge them with context.

    Args:
        text: The raw user message.
        prior: Entities accumulated in earlier turns.
        today: Reference day for relative dates (defaults to date.today()).

    Returns:
        The merged Entities.
    """
    normalized = normalize(text)
    reference_day = today or date.today()

    locations = extract_locations(normalized)
    extracted = Entities(
        origin=locations.origin,
        destination=locations.destination,
        mode=first_match(MODE_RULES, normalized),
        date=extract_date(normalized, reference_day),
        time_preference=extract_time(normalized),
        seat_class=first_match(SEAT_CLASS_RULES, normalized),
        budget_preference=first_match(BUDGET_RULES, normalized),
    )

    return merge_with_context(extracted, prior)
