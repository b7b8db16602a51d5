"""Immutable hand of cards."""

import logging
from typing import Callable, Iterable, Iterator, Union, overload

from .card import Card
from .containers import CardContainer

logger = logging.getLogger(__name__)

CardPredicate = Callable[[Card], bool]


class Hand(CardContainer):
    """
    An ordered, immutable sequence of cards.

    Every operation returns a new Hand; the receiver is never modified.
    Duplicate cards are allowed by the type.

    Attributes:
        cards: Tuple of cards in hand order
    """

    def __init__(self, cards: Iterable[Card] = ()):
        self.cards: tuple[Card, ...] = tuple(cards)

    def sort(self) -> 'Hand':
        """
        Return a copy of the hand sorted by rank, lowest first.

        Suits are not considered and the outcome is stable: cards of equal
        rank keep their relative order.
        """
        if len(self.cards) <= 1:
            return self
        return Hand(_merge_sort(list(self.cards)))

    def take(self, n: int) -> 'Hand':
        """Take the first n cards. Returns the whole hand if n exceeds its size."""
        if n <= 0:
            return Hand()
        if n >= len(self.cards):
            return self
        return Hand(self.cards[:n])

    def take_when(self, n: int, predicate: CardPredicate) -> 'Hand':
        """
        Take the first n cards that match the predicate.

        If fewer than n cards match, as many as possible are returned.
        """
        if n <= 0:
            return Hand()
        return Hand(_first_matches(self.cards, n, predicate))

    def append(self, other: Iterable[Card], n: int) -> 'Hand':
        """Append the first n cards of other. Joins both hands when other is shorter."""
        if n <= 0:
            return self
        other_cards = tuple(other)
        return Hand(self.cards + other_cards[:n])

    def append_when(self, other: Iterable[Card], n: int, predicate: CardPredicate) -> 'Hand':
        """
        Append the first n cards of other that match the predicate.

        If other holds fewer than n matches, as many as possible are appended.
        """
        if n <= 0:
            return self
        return Hand(self.cards + tuple(_first_matches(other, n, predicate)))

    def reverse(self) -> 'Hand':
        """Return a copy of the hand in reverse order."""
        return Hand(reversed(self.cards))

    # CardContainer implementation
    def get_cards(self) -> list[Card]:
        """Get all cards in the hand."""
        return list(self.cards)

    @property
    def size(self) -> int:
        """Number of cards in the hand."""
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    @overload
    def __getitem__(self, index: int) -> Card: ...

    @overload
    def __getitem__(self, index: slice) -> 'Hand': ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Card, 'Hand']:
        if isinstance(index, slice):
            return Hand(self.cards[index])
        return self.cards[index]

    def __eq__(self, other: object) -> bool:
        """Hands are equal when they hold equal cards in the same order."""
        if not isinstance(other, Hand):
            return NotImplemented
        return self.cards == other.cards

    def __hash__(self) -> int:
        return hash(self.cards)

    @classmethod
    def from_string(cls, hand_str: str) -> 'Hand':
        """
        Create a Hand from a string representation.

        Args:
            hand_str: Card strings, either space separated ("As Kd 7c") or
                      concatenated ("AsKd7c"). Each card is 2 characters:
                      rank (A, K, Q, J, T, 9-2) followed by suit (s, h, d, c).

        Returns:
            Hand instance with the parsed cards

        Raises:
            ValueError: If the string format is invalid
        """
        compact = ''.join(hand_str.split())
        if len(compact) % 2 != 0:
            raise ValueError(f"Invalid hand string length: {hand_str} (must be multiple of 2)")

        card_strings = [compact[i : i + 2] for i in range(0, len(compact), 2)]

        cards = []
        for i, card_str in enumerate(card_strings):
            try:
                card = Card.from_string(card_str)
            except ValueError as e:
                raise ValueError(f"Invalid card at position {i + 1} in hand string '{hand_str}': {e}")
            cards.append(card)

        logger.debug(f"Created hand from string '{hand_str}': {[str(c) for c in cards]}")
        return cls(cards)

    def __str__(self) -> str:
        """Space separated short card names, e.g. 'As Kd 7c'."""
        return ' '.join(str(card) for card in self.cards)

    def __repr__(self) -> str:
        return f"Hand('{self}')"


def _first_matches(cards: Iterable[Card], n: int, predicate: CardPredicate) -> list[Card]:
    matches = []
    for card in cards:
        if predicate(card):
            matches.append(card)
            if len(matches) >= n:
                break
    return matches


def _merge_sort(cards: list[Card]) -> list[Card]:
    """Top-down merge sort, splitting at the midpoint (left half is the shorter on odd lengths)."""
    if len(cards) <= 1:
        return cards

    middle = len(cards) // 2
    return _merge(_merge_sort(cards[:middle]), _merge_sort(cards[middle:]))


def _merge(left: list[Card], right: list[Card]) -> list[Card]:
    """Merge two sorted runs, taking from the left on equal ranks."""
    result = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i].rank.high_value <= right[j].rank.high_value:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1

    # At most one of these is non-empty.
    result.extend(left[i:])
    result.extend(right[j:])
    return result
