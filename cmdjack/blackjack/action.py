"""Defines the commands a player can type and how a line of input is parsed into one."""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class InvalidCommandError(ValueError):
    """Raised when a line does not name a command that can be used right now."""

    pass


class InputFormatError(ValueError):
    """Raised when a command's arguments are missing, extra, or malformed."""

    pass


class Action(Enum):
    """Enum for the commands a player can type."""

    CHIPS = "chips"
    EXIT = "exit"
    HAND = "hand"
    HELP = "help"
    HIT = "hit"
    LEAVE = "leave"
    START = "start"
    STAY = "stay"


@dataclass(frozen=True)
class Command:
    """A parsed line of input: the action named by the first token and the remaining tokens."""

    action: Action
    args: Tuple[str, ...] = ()


def parse_command(line: str) -> Command:
    """
    Split a line on whitespace and look up the command named by its first token.

    Raises InvalidCommandError for an empty line or an unknown command name.
    """
    tokens = line.split()
    if not tokens:
        raise InvalidCommandError("Invalid command!")
    try:
        action = Action(tokens[0])
    except ValueError as exc:
        raise InvalidCommandError("Invalid command!") from exc
    return Command(action, tuple(tokens[1:]))


def parse_wager(args: Tuple[str, ...]) -> int:
    """
    Parse the single argument of ``start <wager>`` as a whole number of chips.

    Only plain decimal digits are accepted; signs, separators and decimals are rejected.
    """
    if len(args) != 1:
        raise InputFormatError("Usage: start <wager>")
    token = args[0]
    if not (token.isascii() and token.isdigit()):
        raise InputFormatError(
            "Error: unable to parse wager value - invalid digit found in string"
        )
    return int(token)
