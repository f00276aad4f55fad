"""
This module is used to play a game of Blackjack on the command line.

A session starts with a small pool of chips. Each hand is started with a
wager, played against a freshly shuffled deck, and settled against the
dealer. The session ends when the player types `exit`, when input runs out,
or when the player has no chips left between hands.

Command line arguments configure the session: `--chips` sets the starting
balance, `--seed` makes the shuffles reproducible, `--log_file` followed by a
filename records a transcript of the session, and `--verbose` turns on
diagnostic logging.
"""

import argparse
import logging
import os
import random
import sys
from typing import Callable, Optional

from cmdjack.blackjack.action import InputFormatError, InvalidCommandError, parse_command
from cmdjack.blackjack.constants import PROMPT
from cmdjack.blackjack.hand import BlackjackHand
from cmdjack.blackjack.rules import Rules
from cmdjack.blackjack.state import (
    GamePhase,
    InsufficientChipsError,
    MinimumWagerError,
    OutOfGameState,
    PhaseState,
    RuleViolationError,
)
from cmdjack.blackjack.stats import HandOutcome, SessionStats
from cmdjack.common.deck import Deck, EmptyDeckError
from cmdjack.common.io_interface import (
    ConsoleIOInterface,
    IOInterface,
    LoggingIOInterface,
)

logger = logging.getLogger("cmdjack.blackjack")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class BlackjackGame:
    """
    A class to represent a session of Blackjack.

    Attributes
    ----------
    rules : Rules
        Object defining the session's configuration.
    io_interface : IOInterface
        Interface for input and output operations.
    rng : random.Random
        Random generator used for every shuffle in the session.
    chips : int
        Chips the player holds, not counting the current wager.
    bet : int
        Chips wagered on the hand in progress, 0 between hands.
    deck : Deck
        Deck for the hand in progress.
    player_hand : BlackjackHand
        The player's cards for the hand in progress.
    dealer_hand : BlackjackHand
        The dealer's cards, dealt only when the player stays.
    current_state : PhaseState
        Current phase of the session.
    stats : SessionStats
        Results of the hands played so far.
    running : bool
        False once the session has ended.
    """

    def __init__(
        self,
        rules: Rules,
        io_interface: IOInterface,
        rng: Optional[random.Random] = None,
        deck_factory: Optional[Callable[[random.Random], Deck]] = None,
    ):
        self.rules = rules
        self.io_interface = io_interface
        self.rng = rng or random.Random()
        self.deck_factory = deck_factory or Deck.build
        self.chips = rules.starting_chips
        self.bet = 0
        self.deck = Deck([])
        self.player_hand = BlackjackHand()
        self.dealer_hand = BlackjackHand()
        self.current_state: PhaseState = OutOfGameState()
        self.stats = SessionStats()
        self.running = True

    @property
    def phase(self) -> GamePhase:
        return self.current_state.phase

    def set_state(self, state: PhaseState) -> None:
        """Change the current phase of the session."""
        logger.debug("Changing state from %s to %s", self.current_state, state)
        self.current_state = state

    def place_bet(self, wager: int) -> None:
        """
        Move a wager from the player's chips onto the table.

        :raises MinimumWagerError: If the wager is below the minimum.
        :raises InsufficientChipsError: If the wager is more than the player holds.
        """
        if wager < self.rules.min_wager:
            raise MinimumWagerError(
                f"You must wager at least {self.rules.min_wager} chip!"
            )
        if wager > self.chips:
            raise InsufficientChipsError(
                f"You cannot wager {wager} chips because you only have {self.chips}!"
            )
        self.chips -= wager
        self.bet = wager
        logger.info("Wagered %d chips, %d left", wager, self.chips)

    def new_deck(self) -> None:
        """Shuffle a fresh deck and clear both hands for a new hand."""
        self.deck = self.deck_factory(self.rng)
        self.player_hand.clear()
        self.dealer_hand.clear()

    def draw_card(self):
        """Draw the top card of the deck, starting a fresh deck if this one has run out."""
        try:
            return self.deck.draw()
        except EmptyDeckError:
            logger.warning("Deck ran out mid-hand, shuffling a fresh deck")
            self.deck = self.deck_factory(self.rng)
            return self.deck.draw()

    def end_hand(self, outcome: HandOutcome, returned: int) -> None:
        """
        Finish the hand in progress: pay back `returned` chips and go back out of the game.
        """
        self.chips += returned
        self.stats.update(outcome, self.bet, returned)
        logger.info(
            "Hand ended: %s, wagered %d, returned %d, %d chips",
            outcome.value,
            self.bet,
            returned,
            self.chips,
        )
        self.bet = 0
        self.set_state(OutOfGameState())

    def stop(self) -> None:
        """End the session."""
        self.running = False

    @property
    def is_broke(self) -> bool:
        """True once the player is out of a hand with no chips left to wager."""
        return self.phase == GamePhase.OUT_OF_GAME and self.chips == 0

    def dispatch(self, line: str) -> None:
        """
        Perform the command typed on one line of input.

        Mistakes in the command are reported to the player and leave the session unchanged.
        """
        try:
            command = parse_command(line)
            self.current_state.handle(self, command)
        except InvalidCommandError:
            self.io_interface.output("Invalid command!")
        except (InputFormatError, RuleViolationError) as e:
            self.io_interface.output(str(e))

    def run(self) -> int:
        """
        Read and perform commands until the session ends.

        :return: The process exit status.
        """
        logger.info("Session started with %s", self.rules)
        while self.running:
            if self.is_broke:
                self.io_interface.output_lines(
                    ["You have run out of chips!", "Game over. Thanks for playing!"]
                )
                break
            try:
                line = self.io_interface.input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed, ending session")
                break
            self.dispatch(line)

        self.io_interface.output(self.stats.summary())
        logger.info("Session ended: %s", self.stats.report())
        return 0


def create_rules(args) -> Rules:
    """Create the session rules from the command line arguments."""
    return Rules(starting_chips=args.chips)


def create_io_interface(args) -> IOInterface:
    """Create the IO interface based on the command line arguments."""
    if args.log_file:
        return LoggingIOInterface(args.log_file, ConsoleIOInterface())
    return ConsoleIOInterface()


def configure_logging(verbose: bool = False) -> None:
    """Send diagnostics to stderr. CMDJACK_LOG_LEVEL overrides the default level."""
    requested = os.environ.get("CMDJACK_LOG_LEVEL", "").upper()
    level = requested or "WARNING"
    if verbose:
        level = "DEBUG"
    # getLevelName maps a known level name to its number and anything else to a string
    unknown = not isinstance(logging.getLevelName(level), int)
    if unknown:
        level = "WARNING"
    package_logger = logging.getLogger("cmdjack")
    package_logger.setLevel(level)

    # Add stderr handler if none exists
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    if unknown:
        logger.warning(
            "Unknown CMDJACK_LOG_LEVEL %r, logging at WARNING instead", requested
        )


def main(argv=None):
    """
    Main function to start the game.

    It handles command-line arguments to configure the session, plays the
    session, and exits with its status.
    """
    parser = argparse.ArgumentParser(description="Play Blackjack on the command line.")
    parser.add_argument(
        "--chips",
        type=int,
        default=Rules().starting_chips,
        help="Number of chips to start the session with",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the shuffles so a session can be replayed.",
    )
    parser.add_argument(
        "--log_file",
        type=str,
        help="Also write a transcript of the session to the specified file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log diagnostic messages to stderr.",
        default=False,
    )
    args = parser.parse_args(argv)

    if args.chips < 0:
        parser.error("--chips must be non-negative")

    configure_logging(args.verbose)

    game = BlackjackGame(
        create_rules(args),
        create_io_interface(args),
        rng=random.Random(args.seed),
    )
    sys.exit(game.run())


if __name__ == "__main__":
    main()
