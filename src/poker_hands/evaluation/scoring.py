"""Integer scoring of evaluated poker hands."""
import logging
from typing import Iterable

from poker_hands.core.card import Card, Rank
from poker_hands.evaluation.constants import HAND_SIZE, LOW_ACE_VALUE, SCORE_RADIX
from poker_hands.evaluation.types import HandCategory

logger = logging.getLogger(__name__)


class HandSizeError(ValueError):
    """Raised when a hand of the wrong size is scored."""


def score_hand(category: HandCategory, hand: Iterable[Card]) -> int:
    """
    Score a hand. Bigger is better.

    Each card takes two decimal digits, first card most significant, and
    the category takes the two digits above them. A Straight of
    7d 8c 9s Ts Jc scores 04 07 08 09 10 11, i.e. 40,708,091,011. Any
    hand of a better category outscores every hand of a worse one; within
    a category, earlier cards dominate later ones, so hands must be
    assembled best cards first.

    An Ace leading A-2-3-4-5 is worth 1, making it the lowest straight.

    Args:
        category: Category the hand was classified as
        hand: Exactly five cards, in significance order

    Returns:
        Score that fits in a signed 64-bit integer

    Raises:
        HandSizeError: If the hand does not hold exactly five cards
    """
    cards = list(hand)
    if len(cards) != HAND_SIZE:
        logger.error(
            f"Cannot score hand. Expected {HAND_SIZE} cards but found {len(cards)}: "
            f"{[str(c) for c in cards]}"
        )
        raise HandSizeError(
            f"Cannot score hand. Expected {HAND_SIZE} cards but found {len(cards)}"
        )

    values = [card.rank.high_value for card in cards]
    if _is_low_ace_straight(category, cards):
        values[0] = LOW_ACE_VALUE

    score = 0
    multiplier = 1
    for value in reversed(values):
        score += value * multiplier
        multiplier *= SCORE_RADIX

    return score + int(category) * multiplier


def _is_low_ace_straight(category: HandCategory, cards: list[Card]) -> bool:
    return (
        category in (HandCategory.STRAIGHT, HandCategory.STRAIGHT_FLUSH)
        and cards[0].rank == Rank.ACE
        and cards[1].rank == Rank.TWO
    )
