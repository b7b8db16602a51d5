"""Deck implementation."""
from typing import List, Optional
import logging
import random

from .card import Card, Rank, Suit
from .containers import CardContainer
from .hand import Hand

logger = logging.getLogger(__name__)


class NotEnoughCardsError(ValueError):
    """Raised when more cards are requested than remain in the deck."""

    def __init__(self, requested: int, remaining: int):
        self.requested = requested
        self.remaining = remaining
        super().__init__(
            f"Cannot take {requested} cards. Only {remaining} remain. "
            f"Shuffle the deck and try again."
        )


class Deck(CardContainer):
    """
    A deck of 52 French-suited playing cards.

    Each deck owns its cards and its random source, so independent decks
    (separate games, parallel tests) never interfere with each other.

    Attributes:
        cards: List of cards in the deck, top card first
        rng: Random source used for shuffling
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize a new, unshuffled deck.

        Args:
            rng: Random source for shuffling. A fresh ``random.Random`` is
                 created when omitted; pass a seeded one for repeatable deals.
        """
        self.rng = rng if rng is not None else random.Random()
        self.cards: List[Card] = []
        self._initialize_deck()

    def _initialize_deck(self) -> None:
        """Create a fresh, ordered deck of cards."""
        self.cards = [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Reset the deck to all 52 cards and move each card to a random position."""
        self._initialize_deck()
        self.rng.shuffle(self.cards)
        logger.debug("Deck reset and shuffled")

    def take(self, count: int) -> Hand:
        """
        Take cards from the top of the deck.

        Args:
            count: Number of cards to take

        Returns:
            Hand holding the taken cards, in deal order

        Raises:
            ValueError: If count is negative
            NotEnoughCardsError: If fewer than count cards remain
        """
        if count < 0:
            raise ValueError("Cannot take less than 0 cards")

        if count > len(self.cards):
            raise NotEnoughCardsError(requested=count, remaining=len(self.cards))

        taken, self.cards = self.cards[:count], self.cards[count:]
        logger.debug(f"Took {count} cards, {len(self.cards)} remaining")
        return Hand(taken)

    @property
    def remaining(self) -> int:
        """Number of cards left to deal."""
        return len(self.cards)

    # CardContainer implementation
    def get_cards(self) -> List[Card]:
        """Get all cards in the deck."""
        return self.cards.copy()

    @property
    def size(self) -> int:
        """Number of cards in the deck."""
        return len(self.cards)
