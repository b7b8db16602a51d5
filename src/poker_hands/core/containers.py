"""Interfaces for card containers."""

from abc import ABC, abstractmethod
from typing import Iterator

from .card import Card


class CardContainer(ABC):
    """Interface for any ordered collection of cards (deck, hand, etc.)."""

    @abstractmethod
    def get_cards(self) -> list[Card]:
        """Get a copy of all cards in the container, in order."""
        pass

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of cards in the container."""
        pass

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Card]:
        return iter(self.get_cards())

    def __contains__(self, card: object) -> bool:
        return card in self.get_cards()
