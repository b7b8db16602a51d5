"""Card related classes and utilities."""
from dataclasses import dataclass
from enum import Enum


class Suit(Enum):
    """Card suits. No suit outranks another."""
    CLUBS = 'c'
    DIAMONDS = 'd'
    HEARTS = 'h'
    SPADES = 's'

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Display name, e.g. 'Hearts'."""
        return self.name.capitalize()


class Rank(Enum):
    """
    Card ranks, declared ace-low.

    Ace comes first so that its ordinal makes it the predecessor of Two.
    Sorting and scoring use ``high_value`` instead, where Ace is worth 14.
    """
    ACE = 'A'
    TWO = '2'
    THREE = '3'
    FOUR = '4'
    FIVE = '5'
    SIX = '6'
    SEVEN = '7'
    EIGHT = '8'
    NINE = '9'
    TEN = 'T'
    JACK = 'J'
    QUEEN = 'Q'
    KING = 'K'

    def __str__(self) -> str:
        return self.value

    @property
    def ordinal(self) -> int:
        """Ace-low position: Ace=1, Two=2 ... King=13."""
        return _ORDINALS[self]

    @property
    def high_value(self) -> int:
        """Ace-high value: Two=2 ... King=13, Ace=14."""
        if self is Rank.ACE:
            return Rank.KING.ordinal + 1
        return self.ordinal

    @property
    def label(self) -> str:
        """Display name, e.g. 'Queen' or '7'."""
        if self in _FACE_LABELS:
            return _FACE_LABELS[self]
        return str(self.ordinal)


_ORDINALS = {rank: position for position, rank in enumerate(Rank, start=1)}

_FACE_LABELS = {
    Rank.ACE: 'Ace',
    Rank.JACK: 'Jack',
    Rank.QUEEN: 'Queen',
    Rank.KING: 'King',
}


@dataclass(frozen=True)
class Card:
    """
    Represents a playing card.

    Attributes:
        rank: Card rank (A, 2-9, T, J, Q, K)
        suit: Card suit (clubs, diamonds, hearts, spades)
    """
    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        """String representation in format 'As' for Ace of spades."""
        return f"{self.rank}{self.suit}"

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'Queen of Hearts'."""
        return f"{self.rank.label} of {self.suit.label}"

    @classmethod
    def from_string(cls, card_str: str) -> 'Card':
        """
        Create a Card from a string representation.

        Args:
            card_str: String in format 'As' for Ace of spades.
                      Case-insensitive.

        Returns:
            Card instance

        Raises:
            ValueError: If string format is invalid
        """
        if len(card_str) != 2:
            raise ValueError(f"Invalid card string: {card_str}")

        rank_str, suit_str = card_str[0], card_str[1]

        try:
            rank = next(r for r in Rank if r.value == rank_str.upper())
            suit = next(s for s in Suit if s.value == suit_str.lower())
        except StopIteration:
            raise ValueError(f"Invalid rank or suit in: {card_str}")

        return cls(rank=rank, suit=suit)
