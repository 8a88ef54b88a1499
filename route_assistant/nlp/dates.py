"""Date and time-of-day extraction.

Both extractors work on normalized (lowercased) text and take the
reference day explicitly so that relative expressions are reproducible.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional, Tuple

import dateparser

from ..domain.models import TimePreference
from .rules import Rule, first_match, phrase_rule, substring_rule

_SATURDAY = 5

# Longer phrases come first so 'day after tomorrow' is not read as 'tomorrow'.
RELATIVE_DATE_RULES: Tuple[Rule[Callable[[date], date]], ...] = (
    phrase_rule("day after tomorrow", lambda today: today + timedelta(days=2)),
    phrase_rule("day after", lambda today: today + timedelta(days=2)),
    phrase_rule("today", lambda today: today),
    phrase_rule("tomorrow", lambda today: today + timedelta(days=1)),
    phrase_rule("next week", lambda today: today + timedelta(days=7)),
    phrase_rule(
        "this weekend",
        lambda today: today + timedelta(days=(_SATURDAY - today.weekday()) % 7 or 7),
    ),
)

WEEKDAY_RULES: Tuple[Rule[int], ...] = tuple(
    phrase_rule(name, index)
    for index, name in enumerate(
        ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
    )
)

_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")

_EXPLICIT_DATE = re.compile(
    r"\b(\d{1,2})[/\-\s]((?:\d{1,2}|" + "|".join(_MONTHS) + r")[a-z]*)\b",
    re.IGNORECASE,
)

# Half-open windows; 'night' wraps past midnight.
TIME_OF_DAY_RULES: Tuple[Rule[TimePreference], ...] = (
    substring_rule("morning", TimePreference(time(6, 0), time(12, 0), "morning")),
    substring_rule("afternoon", TimePreference(time(12, 0), time(17, 0), "afternoon")),
    substring_rule("evening", TimePreference(time(17, 0), time(21, 0), "evening")),
    substring_rule("night", TimePreference(time(21, 0), time(6, 0), "night")),
    substring_rule("early", TimePreference(time(4, 0), time(8, 0), "early morning")),
    substring_rule("late", TimePreference(time(20, 0), time(23, 59), "late night")),
)

_EXPLICIT_TIME = re.compile(
    r"(?:at|around|by|before|after)\s*(\d{1,2})(?::(\d{2}))?\s*(am|pm)?",
    re.IGNORECASE,
)


def _next_weekday(today: date, weekday: int) -> date:
    """Return the next occurrence of ``weekday`` strictly after ``today``."""
    days_ahead = (weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def _parse_explicit_date(text: str, today: date) -> Optional[date]:
    match = _EXPLICIT_DATE.search(text)
    if not match:
        return None

    parsed = dateparser.parse(
        match.group(0),
        languages=["en"],
        settings={
            "DATE_ORDER": "DMY",
            "RELATIVE_BASE": datetime.combine(today, time.min),
            "PREFER_DATES_FROM": "current_period",
        },
    )
    if parsed is None:
        return None

    # Day/month tokens carry no year: anchor to today's year, roll past dates forward.
    try:
        candidate = parsed.date().replace(year=today.year)
        if candidate < today:
            candidate = candidate.replace(year=today.year + 1)
    except ValueError:
        return None

    return candidate


def extract_date(text: str, today: date) -> Optional[date]:
    """Extract a travel date from normalized text.

    Relative phrases are tried first, then weekday names, then explicit
    day/month tokens. Only the first category with a match is used.

    Args:
        text: Lowercased message text.
        today: Reference day for relative expressions.

    Returns:
        The resolved date, or None.
    """
    offset = first_match(RELATIVE_DATE_RULES, text)
    if offset is not None:
        return offset(today)

    weekday = first_match(WEEKDAY_RULES, text)
    if weekday is not None:
        return _next_weekday(today, weekday)

    return _parse_explicit_date(text, today)


def extract_time(text: str) -> Optional[TimePreference]:
    """Extract a time-of-day preference from normalized text.

    Keyword windows win over explicit clock expressions. A clock
    expression such as 'at 3pm' or 'around 14:30' becomes an anchor time.

    Args:
        text: Lowercased message text.

    Returns:
        The TimePreference, or None.
    """
    window = first_match(TIME_OF_DAY_RULES, text)
    if window is not None:
        return window

    match = _EXPLICIT_TIME.search(text)
    if not match:
        return None

    hour = int(match.group(1))
    minutes = match.group(2) or "00"
    meridiem = (match.group(3) or "").lower()
    if meridiem == "pm" and hour < 12:
        hour += 12
    if meridiem == "am" and hour == 12:
        hour = 0

    try:
        anchor = time(hour, int(minutes))
    except ValueError:
        return None

    return TimePreference(start=anchor, end=None, label=f"around {hour}:{minutes}")
