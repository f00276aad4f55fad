"""
This module contains the IOInterface abstract base class and its implementations.

The game core only ever talks to an IOInterface: it reads one line of input per
command and writes whole lines of output. Swapping the interface is how the
game is played on a console, scripted in tests, or recorded to a transcript.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for line oriented input/output operations in the game.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """
        Get a line of input from the user with a prompt.

        Raises EOFError when no more input can be read.
        """
        pass

    def output_lines(self, lines: Iterable[str]) -> None:
        """Output several messages, one line each."""
        for line in lines:
            self.output(line)


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages and replays scripted input.

    Methods
    -------
    def output(self, message):
        Collect an output message.

    def input(self, prompt):
        Return the next scripted input line.

    def add_input(self, line):
        Add a line to the input script.
    """

    __test__ = False

    def __init__(self, input_responses: Optional[Iterable[str]] = None):
        self.sent_messages: List[str] = []
        self.prompts: List[str] = []
        self.input_responses: List[str] = list(input_responses or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        raise EOFError("No more input left in TestIOInterface script.")

    def add_input(self, line: str) -> None:
        """Add a line to the end of the input script."""
        self.input_responses.append(line)

    def clear(self) -> None:
        """Forget every message collected so far."""
        self.sent_messages.clear()


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive gameplay.

    Methods
    -------
    def output(self, message: str):
        Output a message to the console.

    def input(self, prompt: str):
        Get input from the console.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)


class LoggingIOInterface(IOInterface):
    """
    A logging IO interface for recording purposes.

    Every prompt, input line and output message passing through the wrapped
    interface is also appended to a transcript file.
    """

    def __init__(self, log_file_path: str, io_interface: Optional[IOInterface] = None):
        self.log_file_path = log_file_path
        self.io_interface = io_interface or ConsoleIOInterface()

    def _write(self, message: str) -> None:
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def output(self, message: str) -> None:
        """Output a message and write it to the transcript."""
        self.io_interface.output(message)
        self._write(message)

    def input(self, prompt: str) -> str:
        """Read a line from the wrapped interface and write it to the transcript after its prompt."""
        line = self.io_interface.input(prompt)
        self._write(f"{prompt}{line}")
        return line
