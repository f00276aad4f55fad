"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Ace, Two through Ten, Jack, Queen, and King.

- `Card`: An immutable playing card. A card has a suit and a rank, compares
and hashes by both, and renders as "<Rank> of <Suit>" for display.

This module is part of the `cmdjack` package, a command line blackjack game.
"""

from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck, in the order they are printed on the deck box.
    """

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.rank_str


class Card:
    """
    Class representing a playing card. Cards are immutable once created.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    Two of Hearts
    """

    __slots__ = ("_suit", "_rank")

    def __init__(self, suit: Suit, rank: Rank):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        object.__setattr__(self, "_suit", suit)
        object.__setattr__(self, "_rank", rank)

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return NotImplemented

    def __hash__(self):
        return hash((self.suit, self.rank))

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"{self.rank.rank_str} of {self.suit}"
