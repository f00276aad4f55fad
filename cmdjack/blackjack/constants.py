"""Blackjack-specific constants and value mappings."""

from cmdjack.common.card import Rank

BLACKJACK = 21
DEALER_LIMIT = 17
STARTING_CHIPS = 10
MIN_WAGER = 1

# Aces are listed at their soft value; the scorer drops them to ACE_HARD_VALUE when needed.
ACE_HARD_VALUE = 1

BLACKJACK_VALUES = {
    Rank.ACE: 11,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

PROMPT = "> "

HELP_MENU_HEADER = [
    "-----------------------",
    "Command Line Blackjack",
    "-----------------------",
    "Available commands",
]


def get_blackjack_value(rank: Rank) -> int:
    """Get the blackjack value for a given rank, counting aces as 11."""
    return BLACKJACK_VALUES[rank]
