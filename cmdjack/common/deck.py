"""
This module contains the Deck class, which represents a single 52-card deck.

The deck keeps every card it was built with and a cursor pointing at the top.
Drawing advances the cursor, so an exhausted deck is a checkable condition
rather than a failed pop.

>>> deck = Deck()
>>> deck.size
52
>>> deck.draw()
Card(Suit.HEARTS, Rank.ACE)
>>> deck.size
51
"""

import logging
import random
from typing import Iterable, List, Optional, Union

from cmdjack.common.card import Card, Rank, Suit

logger = logging.getLogger("cmdjack.common.deck")


class EmptyDeckError(IndexError):
    """Raised when a card is drawn from a deck that has none left."""

    pass


class Deck:
    """
    A class representing a deck of cards.
    """

    # Precompute the default deck
    _default_deck = [Card(suit, rank) for rank in Rank for suit in Suit]

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        """
        Initialize a Deck instance.

        :param cards: Cards to populate the deck with, top card first (optional).
                      If not provided, a default unshuffled deck is constructed.
        >>> deck = Deck()
        >>> deck.size
        52
        """
        if cards is None:
            self._cards: List[Card] = self.initialize_default_deck()
        else:
            self._cards = list(cards)
        self._cursor = 0

    @classmethod
    def build(cls, rng: Optional[random.Random] = None) -> "Deck":
        """
        Build a full deck of 52 cards in a uniformly random order.

        :param rng: The random generator to shuffle with. A fresh generator
                    seeded from the operating system is used when omitted.
        """
        deck = cls()
        deck.shuffle(rng)
        return deck

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct a default deck with all possible combinations of suits and ranks.

        :return: A list of Card instances representing the default deck.
        >>> deck = Deck()
        >>> len(deck.cards)
        52
        """
        return self._default_deck.copy()

    @property
    def cards(self) -> List[Card]:
        """The cards remaining in the deck, top card first."""
        return self._cards[self._cursor :]

    def shuffle(self, rng: Optional[random.Random] = None) -> "Deck":
        """
        Shuffle the cards remaining in the deck.

        :param rng: The random generator to shuffle with.
        """
        rng = rng or random.Random()
        remaining = self._cards[self._cursor :]
        rng.shuffle(remaining)
        self._cards[self._cursor :] = remaining
        return self

    def draw(self) -> Card:
        """
        Remove and return the top card of the deck.

        :raises EmptyDeckError: If every card has already been drawn.
        """
        if self.is_empty():
            raise EmptyDeckError("Cannot draw from an empty deck.")
        card = self._cards[self._cursor]
        self._cursor += 1
        logger.debug("Drew %s, %d cards left", card, self.size)
        return card

    def deal(self, num_cards=1) -> Union[Card, List[Card]]:
        """
        Draw n cards from the deck.

        :return: A card instance or a list of card instances.
        >>> deck = Deck()
        >>> cards = deck.deal(5)
        >>> len(cards)
        5
        """
        if num_cards == 1:
            return self.draw()
        return [self.draw() for _ in range(num_cards)]

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.

        :return: The size of the deck.
        """
        return len(self._cards) - self._cursor

    def is_empty(self) -> bool:
        """
        Check if the deck is empty.

        :return: True if the deck is empty, False otherwise.
        """
        return self._cursor >= len(self._cards)

    def reset(self):
        """
        Reset the deck to a full, unshuffled 52 cards.
        """
        self._cards = self.initialize_default_deck()
        self._cursor = 0

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the deck.

        :return: A string representation of the deck.
        """
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the deck.

        :return: A string representation of the deck.
        >>> deck = Deck()
        >>> str(deck)
        'Deck of 52 cards'
        """
        return f"Deck of {self.size} cards"
