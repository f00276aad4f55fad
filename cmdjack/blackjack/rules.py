from cmdjack.blackjack.constants import DEALER_LIMIT, MIN_WAGER, STARTING_CHIPS
from cmdjack.blackjack.hand import BlackjackHand


class Rules:
    def __init__(
        self,
        starting_chips: int = STARTING_CHIPS,
        dealer_limit: int = DEALER_LIMIT,
        min_wager: int = MIN_WAGER,
    ):
        if starting_chips < 0:
            raise ValueError("Starting chips must be non-negative")
        if min_wager < 1:
            raise ValueError("Minimum wager must be at least 1")
        self.starting_chips = starting_chips
        self.dealer_limit = dealer_limit
        self.min_wager = min_wager

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "starting_chips": self.starting_chips,
            "dealer_limit": self.dealer_limit,
            "min_wager": self.min_wager,
        }

    def should_dealer_hit(self, hand: BlackjackHand) -> bool:
        """The dealer draws while below the limit, whatever the player holds."""
        return hand.value() < self.dealer_limit

    def __repr__(self) -> str:
        return f"Rules({self.to_dict()})"
