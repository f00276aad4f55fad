"""
This module provides the game phase state machine for a Blackjack session.
It uses the state design pattern: the session is always in exactly one phase
state, and each phase state decides which commands are legal and what they do.

Phases:

OutOfGameState: Between hands. The player can check their chips or start a hand.
InGameState: A hand is in progress. The player can hit, stay, leave, or look at their hand.

The handle method in each phase state class receives one parsed command,
performs it against the game, and transitions the game to the next phase when
the command ends or starts a hand. Commands a phase does not handle raise
InvalidCommandError. Each phase state class also overrides the str method to
return the state name.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import List

from cmdjack.blackjack.action import (
    Action,
    Command,
    InvalidCommandError,
    parse_wager,
)
from cmdjack.blackjack.constants import BLACKJACK, HELP_MENU_HEADER
from cmdjack.blackjack.stats import HandOutcome

logger = logging.getLogger("cmdjack.blackjack.state")


class RuleViolationError(ValueError):
    """Raised when a well formed command breaks a rule of the game."""

    pass


class MinimumWagerError(RuleViolationError):
    """Raised when a wager is below the table minimum."""

    pass


class InsufficientChipsError(RuleViolationError):
    """Raised when a player does not have enough chips to cover a wager."""

    pass


class GamePhase(Enum):
    """
    Possible phases of a blackjack session.
    """

    OUT_OF_GAME = auto()
    IN_GAME = auto()


def calculate_outcome(dealer_value: int, player_value: int) -> HandOutcome:
    """Decide a hand that went to the dealer. A dealer bust wins for the player whatever they hold."""
    if dealer_value > BLACKJACK:
        return HandOutcome.WIN
    if player_value > BLACKJACK:
        return HandOutcome.BUST
    if dealer_value < player_value:
        return HandOutcome.WIN
    if dealer_value == player_value:
        return HandOutcome.PUSH
    return HandOutcome.LOSS


def payout_for(outcome: HandOutcome, bet: int) -> int:
    """The chips handed back to the player for a finished hand. The wager itself was taken at the start."""
    if outcome == HandOutcome.WIN:
        return bet * 2
    if outcome in (HandOutcome.PUSH, HandOutcome.BLACKJACK):
        return bet
    return 0


class PhaseState(ABC):
    """
    Abstract base class for phase states.
    """

    phase: GamePhase
    help_lines: List[str] = []

    @abstractmethod
    def handle(self, game, command: Command) -> None:
        """Perform one command in this phase."""

    def show_help(self, game) -> None:
        game.io_interface.output_lines(HELP_MENU_HEADER + self.help_lines)

    def __str__(self) -> str:
        return self.__class__.__name__


class OutOfGameState(PhaseState):
    """
    The phase between hands, where no wager is on the table.
    """

    phase = GamePhase.OUT_OF_GAME
    help_lines = [
        "chips: Show how many chips you have.",
        "exit: End the game.",
        "help: Show this menu.",
        "start <wager>: Start a new hand with the given wager.",
    ]

    def handle(self, game, command: Command) -> None:
        match command.action:
            case Action.EXIT:
                game.stop()
            case Action.HELP:
                self.show_help(game)
            case Action.CHIPS:
                game.io_interface.output(f"You have {game.chips} chips.")
            case Action.START:
                self.start(game, parse_wager(command.args))
            case _:
                raise InvalidCommandError("Invalid command!")

    def start(self, game, wager: int) -> None:
        """
        Takes the wager, shuffles a fresh deck and deals the player two cards.

        A two card 21 is settled on the spot by handing the wager back, and the
        session stays out of a hand. Otherwise the game moves to InGameState.
        """
        game.place_bet(wager)
        game.new_deck()

        for _ in range(2):
            game.player_hand.add_card(game.draw_card())

        game.io_interface.output("You have been dealt the following cards:")
        game.io_interface.output_lines(game.player_hand.render())

        if game.player_hand.is_twenty_one:
            game.io_interface.output(
                f"Blackjack! Your wager of {game.bet} chips has been returned."
            )
            game.end_hand(HandOutcome.BLACKJACK, payout_for(HandOutcome.BLACKJACK, game.bet))
            return

        game.set_state(InGameState())
        game.io_interface.output_lines(
            [
                "",
                "You can now choose from the following actions:",
                "- hit: Have the dealer give you another card. Don't go over 21, though!",
                "- stay: Keep your current hand value and let the dealer play.",
                "",
                'To view more options, you can type "help".',
            ]
        )


class InGameState(PhaseState):
    """
    The phase where a hand is in progress and the player decides how to play it.
    """

    phase = GamePhase.IN_GAME
    help_lines = [
        "exit: End the game.",
        "hand: Show the cards in your hand.",
        "help: Show this menu.",
        "hit: Have the dealer give you another card. Don't go over 21, though!",
        "leave: Leave the current hand. Your wager is not returned.",
        "stay: Keep your current hand value and let the dealer play.",
    ]

    def handle(self, game, command: Command) -> None:
        match command.action:
            case Action.EXIT:
                game.stop()
            case Action.HELP:
                self.show_help(game)
            case Action.HAND:
                game.io_interface.output_lines(game.player_hand.render())
            case Action.HIT:
                self.hit(game)
            case Action.STAY:
                self.stay(game)
            case Action.LEAVE:
                self.leave(game)
            case _:
                raise InvalidCommandError("Invalid command!")

    def hit(self, game) -> None:
        """Deals the player one card. A bust loses the wager and exactly 21 hands it back."""
        card = game.draw_card()
        game.player_hand.add_card(card)
        value = game.player_hand.value()
        game.io_interface.output_lines(
            [
                f"You have been dealt the {card}!",
                f"Your hand value is now {value}!",
            ]
        )

        if game.player_hand.is_bust:
            game.io_interface.output(f"You busted! You lost {game.bet} chips.")
            game.end_hand(HandOutcome.BUST, payout_for(HandOutcome.BUST, game.bet))
        elif game.player_hand.is_twenty_one:
            game.io_interface.output(
                f"Blackjack! Your wager of {game.bet} chips has been returned."
            )
            game.end_hand(HandOutcome.BLACKJACK, payout_for(HandOutcome.BLACKJACK, game.bet))

    def stay(self, game) -> None:
        """Lets the dealer play out their hand, then settles the wager."""
        self.play_dealer(game)

        player_value = game.player_hand.value()
        dealer_value = game.dealer_hand.value()
        outcome = calculate_outcome(dealer_value, player_value)
        returned = payout_for(outcome, game.bet)

        game.io_interface.output("Your cards:")
        game.io_interface.output_lines(game.player_hand.render())
        game.io_interface.output("The dealer's cards:")
        game.io_interface.output_lines(game.dealer_hand.render(owner="The dealer's"))
        game.io_interface.output(self.outcome_message(outcome, dealer_value, game.bet))

        game.end_hand(outcome, returned)

    def play_dealer(self, game) -> None:
        """
        Deals the dealer two cards and keeps drawing until the dealer reaches the limit.

        The dealer never looks at the player's hand.
        """
        for _ in range(2):
            game.dealer_hand.add_card(game.draw_card())
        while game.rules.should_dealer_hit(game.dealer_hand):
            card = game.draw_card()
            game.dealer_hand.add_card(card)
            logger.debug("Dealer hits and gets %s", card)
        logger.debug("Dealer stands on %d", game.dealer_hand.value())

    def outcome_message(self, outcome: HandOutcome, dealer_value: int, bet: int) -> str:
        if outcome == HandOutcome.WIN and dealer_value > BLACKJACK:
            return f"The dealer busted! You won {bet} chips."
        if outcome == HandOutcome.WIN:
            return f"You beat the dealer! You won {bet} chips."
        if outcome == HandOutcome.PUSH:
            return f"It's a push! Your wager of {bet} chips has been returned."
        return f"The dealer wins! You lost {bet} chips."

    def leave(self, game) -> None:
        game.io_interface.output(
            f"You left the hand and forfeited your wager of {game.bet} chips."
        )
        game.end_hand(HandOutcome.FORFEIT, payout_for(HandOutcome.FORFEIT, game.bet))
