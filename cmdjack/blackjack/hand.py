"""
Blackjack hand scoring.

Aces are scored incrementally: each ace is counted as 11 or 1 depending on the
running total of the cards before it, and that choice is never revisited. This
means the order of the cards matters. ``[Ace, Five, Ten]`` scores 26, because
the ace was already committed to 11 by the time the ten arrived, while
``[Ten, Five, Ace]`` scores 16.
"""

from typing import Iterable, List

from cmdjack.blackjack.constants import ACE_HARD_VALUE, BLACKJACK, get_blackjack_value
from cmdjack.common.card import Card, Rank
from cmdjack.common.hand import Hand


def score(cards: Iterable[Card]) -> int:
    """Return the blackjack value of a sequence of cards, deciding each ace as it is reached."""
    total = 0
    for card in cards:
        value = get_blackjack_value(card.rank)
        # TODO: count aces last so [Ace, Ace, Ten] scores 12 instead of busting
        if card.rank == Rank.ACE and total + value > BLACKJACK:
            value = ACE_HARD_VALUE
        total += value
    return total


class BlackjackHand(Hand):
    """A hand in the game of Blackjack. Its value is recomputed from the cards every time."""

    def value(self) -> int:
        """Calculate the value of the hand."""
        return score(self._cards)

    @property
    def is_bust(self) -> bool:
        return self.value() > BLACKJACK

    @property
    def is_twenty_one(self) -> bool:
        return self.value() == BLACKJACK

    def render(self, owner: str = "Your") -> List[str]:
        """
        Render the hand for display: one line per card, then a value line.

        The first card is labelled as dealt face down and the rest face up.
        """
        lines = []
        for index, card in enumerate(self._cards):
            facing = "down" if index == 0 else "up"
            lines.append(f"({facing}) {card}")
        lines.append(f"{owner} hand value is {self.value()}!")
        return lines
