"""Common types for poker evaluation."""
from dataclasses import dataclass
from enum import IntEnum

from poker_hands.core.hand import Hand


class HandCategory(IntEnum):
    """
    Poker hand categories, weakest first.

    See https://en.wikipedia.org/wiki/Texas_hold_%27em#Hand_values
    """
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIRS = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def display_name(self) -> str:
        """Human readable name, e.g. 'Two Pairs'."""
        return self.name.replace('_', ' ').title().replace(' Of A ', ' of a ')

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class HandResult:
    """
    Result of hand evaluation.

    Attributes:
        category: Category of the best hand
        hand: The cards making up the best hand, most significant first
        score: Comparable score; higher beats lower
    """
    category: HandCategory
    hand: Hand
    score: int

    @property
    def description(self) -> str:
        """Human-readable description, e.g. 'Straight: 5c 6s 7d 8d 9h'."""
        return f"{self.category.display_name}: {self.hand}"
