"""Ordered rule tables for the rule-based NLP layer.

A rule pairs a predicate over normalized text with the payload it yields.
Tables are plain tuples tested in declaration order, so priority and
first-match semantics are a property of the table, not of the container.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A (predicate, payload) pair."""

    predicate: Callable[[str], bool]
    payload: T


def pattern_rule(pattern: str, payload: T) -> Rule[T]:
    """Build a rule whose predicate is a case-insensitive regex search."""
    compiled = re.compile(pattern, re.IGNORECASE)
    return Rule(predicate=lambda text: compiled.search(text) is not None, payload=payload)


def phrase_rule(phrase: str, payload: T) -> Rule[T]:
    """Build a rule matching a whole word or phrase."""
    return pattern_rule(rf"\b{re.escape(phrase)}\b", payload)


def substring_rule(fragment: str, payload: T) -> Rule[T]:
    """Build a rule matching a fragment anywhere in the text."""
    return Rule(predicate=lambda text: fragment in text, payload=payload)


def first_match(rules: Iterable[Rule[T]], text: str) -> Optional[T]:
    """Return the payload of the first rule whose predicate holds."""
    for rule in rules:
        if rule.predicate(text):
            return rule.payload
    return None


def count_matches(rules: Iterable[Rule[T]], text: str) -> int:
    """Count how many rules hold; every rule is evaluated."""
    return sum(1 for rule in rules if rule.predicate(text))


_TRAILING_PUNCTUATION = re.compile(r"[\s?!.,;:]+$")


def normalize(text: str) -> str:
    """Lowercase a message and strip surrounding whitespace and closing punctuation."""
    return _TRAILING_PUNCTUATION.sub("", text.lower().strip())
