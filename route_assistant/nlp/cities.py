"""City alias table and resolution.

Location phrases captured by the extractor are mapped to canonical city
names here. Resolution is exact-first, then a bidirectional substring
test over the alias table in table order.

Example
-------
    >>> resolve_city("bombay")
    'Mumbai'
    >>> resolve_city("new delhi station")
    'Delhi'
    >>> resolve_city("gotham") is None
    True
"""

from __future__ import annotations

import re
import unicodedata
from typing import Dict, Optional, Tuple

# Order matters for the substring fallback: the first alias that passes wins.
CITY_ALIASES: Tuple[Tuple[str, str], ...] = (
    ("mumbai", "Mumbai"),
    ("bombay", "Mumbai"),
    ("bom", "Mumbai"),
    ("delhi", "Delhi"),
    ("new delhi", "Delhi"),
    ("dilli", "Delhi"),
    ("pune", "Pune"),
    ("poona", "Pune"),
    ("bangalore", "Bangalore"),
    ("bengaluru", "Bangalore"),
    ("blr", "Bangalore"),
    ("chennai", "Chennai"),
    ("madras", "Chennai"),
    ("hyderabad", "Hyderabad"),
    ("hyd", "Hyderabad"),
    ("kolkata", "Kolkata"),
    ("calcutta", "Kolkata"),
    ("cal", "Kolkata"),
    ("jaipur", "Jaipur"),
    ("ahmedabad", "Ahmedabad"),
    ("amd", "Ahmedabad"),
    ("goa", "Goa"),
    ("panaji", "Goa"),
    ("lucknow", "Lucknow"),
)

_ALIAS_INDEX: Dict[str, str] = dict(CITY_ALIASES)

# A phrase shorter than this is never matched as a fragment of an alias
# ('go' must not resolve to 'goa').
MIN_PARTIAL_LENGTH = 3


def _canonicalize(text: str) -> str:
    """Normalize a phrase for matching (remove accents and non-letters)."""
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")
    normalized = re.sub(r"[^a-z\s]", "", normalized.lower())
    return re.sub(r"\s+", " ", normalized).strip()


def resolve_city(phrase: Optional[str]) -> Optional[str]:
    """Resolve a location phrase to a canonical city name.

    Args:
        phrase: Raw captured phrase (e.g. 'bombay', 'pune junction').

    Returns:
        The canonical city name, or None if nothing matches.
    """
    if not phrase:
        return None

    cleaned = _canonicalize(phrase)
    if not cleaned:
        return None

    exact = _ALIAS_INDEX.get(cleaned)
    if exact is not None:
        return exact

    # Short aliases can still collide with unrelated words (e.g. 'cal' in 'local').
    for alias, city in CITY_ALIASES:
        if alias in cleaned or (len(cleaned) >= MIN_PARTIAL_LENGTH and cleaned in alias):
            return city

    return None


def known_cities() -> Tuple[str, ...]:
    """Return the canonical city names in first-seen order."""
    return tuple(dict.fromkeys(city for _, city in CITY_ALIASES))
