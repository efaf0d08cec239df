"""
Entity typer for WORD blocks.

Word types are decided by an ordered rule table; the first matching rule
wins. The rules overlap (a phone pattern also admits plain digit runs), so
their order is significant.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .document import WordType


@dataclass(frozen=True)
class EntityRule:
    """Pattern (full match) plus an optional minimum text length."""
    word_type: WordType
    pattern: re.Pattern
    min_length: int = 0

    def matches(self, text: str) -> bool:
        return len(text) >= self.min_length and self.pattern.fullmatch(text) is not None


ENTITY_RULES: Tuple[EntityRule, ...] = (
    EntityRule(WordType.NUMBER, re.compile(r"[0-9]+")),
    EntityRule(WordType.DECIMAL, re.compile(r"[0-9]+\.[0-9]+")),
    EntityRule(WordType.PHONE, re.compile(r"[0-9\s\-()+]+"), min_length=10),
    EntityRule(WordType.EMAIL, re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")),
    EntityRule(WordType.DATE, re.compile(r"[0-9]{1,2}[/-][0-9]{1,2}[/-](?:[0-9]{4}|[0-9]{2})")),
)


def classify_word(text: Optional[str], rules: Tuple[EntityRule, ...] = ENTITY_RULES) -> WordType:
    """Return the type of the first rule matching ``text``; TEXT otherwise."""
    if not text:
        return WordType.TEXT
    for rule in rules:
        if rule.matches(text):
            return rule.word_type
    return WordType.TEXT
