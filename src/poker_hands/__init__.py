"""Poker hand evaluation package."""

from poker_hands.core.card import Card, Rank, Suit
from poker_hands.core.containers import CardContainer
from poker_hands.core.deck import Deck, NotEnoughCardsError
from poker_hands.core.hand import Hand
from poker_hands.evaluation.evaluator import (
    HandEvaluator,
    best_hand,
    compare_hands,
    evaluate,
    score,
)
from poker_hands.evaluation.scoring import HandSizeError, score_hand
from poker_hands.evaluation.types import HandCategory, HandResult

__version__ = "0.1.0"
__all__ = [
    "Card",
    "Rank",
    "Suit",
    "CardContainer",
    "Deck",
    "NotEnoughCardsError",
    "Hand",
    "HandCategory",
    "HandResult",
    "HandEvaluator",
    "HandSizeError",
    "best_hand",
    "compare_hands",
    "evaluate",
    "score",
    "score_hand",
]
