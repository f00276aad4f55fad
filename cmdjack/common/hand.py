"""
This module contains classes to represent a hand of cards in a card game.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
Each hand holds its cards in the order they were dealt.

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A concrete implementation of a hand of cards.
"""
from abc import ABC
from typing import Iterator, List

from cmdjack.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    This class provides a basic structure for a hand of cards, including methods to add cards
    and to clear the hand between rounds. Subclasses should override the __repr__ and __str__
    methods to provide a string representation of the hand.
    """

    def __init__(self):
        self._cards: List[Card] = []

    @property
    def cards(self) -> List[Card]:
        """Returns a copy of the cards in the hand, in the order they were dealt."""
        return list(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Adds a card to the hand.

        Args:
            card: The card to add.
        """
        self._cards.append(card)

    def clear(self) -> None:
        """Removes every card from the hand."""
        self._cards.clear()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))


class Hand(AbstractHand):
    """
    A concrete implementation of a hand of cards.

    This class provides a string representation of a hand of cards for both debugging and display purposes.
    """

    def __repr__(self) -> str:
        """
        Returns a string representation of the hand for debugging.

        Returns:
            A string in the form "Hand([Card(...), ...])".
        """
        return f"{type(self).__name__}({self._cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "Ace of Hearts, Two of Clubs".
        """
        return ", ".join(str(card) for card in self._cards)
