"""Locale-aware, case-sensitive sort keys for display names.

This module orders names the way a root-locale collator does:
whitespace sorts before punctuation, then symbols, currency signs,
digits, and letters. Letters compare without regard to case or accents
first, then by accent, then lowercase before uppercase. It never reads
the process locale, so output order is identical on every build host.
"""

from __future__ import annotations

import unicodedata
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

PrimaryWeight = tuple[int, int]
CollationKey = tuple[tuple[PrimaryWeight, ...], str, str, str]

_WHITESPACE_GROUP = 0
_PUNCTUATION_GROUP = 1
_SYMBOL_GROUP = 2
_CURRENCY_GROUP = 3
_DIGIT_GROUP = 4
_LETTER_GROUP = 5

# Root collation order of the ASCII non-alphanumeric characters.
_ASCII_VARIABLE_ORDER = "\t\n\v\f\r _-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_ASCII_RANKS = {char: rank for rank, char in enumerate(_ASCII_VARIABLE_ORDER)}
_NON_ASCII_RANK_OFFSET = len(_ASCII_VARIABLE_ORDER)


def collation_key(text: str) -> CollationKey:
    """Build a multi-level sort key for one display name.

    Args:
        text: Display name to order.

    Returns:
        Tuple of primary, secondary, tertiary, and identity levels.
    """
    decomposed = unicodedata.normalize("NFD", text)
    base_letters = "".join(char for char in decomposed if not unicodedata.combining(char))
    primary = tuple(_primary_weight(char) for char in base_letters.casefold())
    secondary = decomposed.casefold()
    tertiary = decomposed.swapcase()
    return (primary, secondary, tertiary, text)


def sort_by_name(items: Iterable[T], name_of: Callable[[T], str]) -> list[T]:
    """Stable-sort items by the collation key of their name.

    Args:
        items: Items to order.
        name_of: Extracts the display name from one item.

    Returns:
        New list in non-decreasing collation order.
    """
    return sorted(items, key=lambda item: collation_key(name_of(item)))


def _primary_weight(char: str) -> PrimaryWeight:
    category = unicodedata.category(char)
    if char.isspace() or category.startswith("Z"):
        return (_WHITESPACE_GROUP, _variable_rank(char))
    if category == "Sc":
        return (_CURRENCY_GROUP, _variable_rank(char))
    if category.startswith("P"):
        return (_PUNCTUATION_GROUP, _variable_rank(char))
    if category.startswith("S"):
        return (_SYMBOL_GROUP, _variable_rank(char))
    if category == "Nd":
        return (_DIGIT_GROUP, unicodedata.digit(char))
    return (_LETTER_GROUP, ord(char))


def _variable_rank(char: str) -> int:
    return _ASCII_RANKS.get(char, _NON_ASCII_RANK_OFFSET + ord(char))
