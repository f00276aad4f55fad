"""
This module contains the SessionStats class which is responsible for
tracking the results of every hand played in a session.
"""

from enum import Enum


class HandOutcome(Enum):
    """How a hand ended, from the player's point of view."""

    BLACKJACK = "blackjack"
    WIN = "win"
    PUSH = "push"
    LOSS = "loss"
    BUST = "bust"
    FORFEIT = "forfeit"


class SessionStats:
    """
    A class that holds the statistics of a session.
    """

    def __init__(self):
        """
        Initializes the SessionStats with default values.
        """
        self.hands_played = 0
        self.outcomes = {outcome: 0 for outcome in HandOutcome}
        self.net_chips = 0

    def update(self, outcome: HandOutcome, bet: int, returned: int) -> None:
        """Record a finished hand: its outcome, the wager, and the chips paid back."""
        self.hands_played += 1
        self.outcomes[outcome] += 1
        self.net_chips += returned - bet

    @property
    def player_wins(self) -> int:
        return self.outcomes[HandOutcome.WIN]

    @property
    def player_losses(self) -> int:
        return (
            self.outcomes[HandOutcome.LOSS]
            + self.outcomes[HandOutcome.BUST]
            + self.outcomes[HandOutcome.FORFEIT]
        )

    def report(self):
        """
        Returns a dictionary containing the current statistics.
        """
        return {
            "hands_played": self.hands_played,
            "player_wins": self.player_wins,
            "player_losses": self.player_losses,
            "pushes": self.outcomes[HandOutcome.PUSH],
            "blackjacks": self.outcomes[HandOutcome.BLACKJACK],
            "net_chips": self.net_chips,
        }

    def summary(self) -> str:
        """A one line, human readable summary of the session."""
        report = self.report()
        return (
            f"Hands played: {report['hands_played']}, "
            f"won: {report['player_wins']}, "
            f"lost: {report['player_losses']}, "
            f"pushed: {report['pushes']}, "
            f"blackjacks: {report['blackjacks']}, "
            f"net chips: {report['net_chips']:+d}"
        )
