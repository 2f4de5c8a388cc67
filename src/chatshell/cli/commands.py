"""
Static REPL command table.

The table is shared by the validator (multiline triggers), the completer
(command names) and the help renderer (descriptions).
"""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class ReplCommand:
    """
    A dot-command understood by the REPL.

    Attributes:
        name: Command text as typed, including the leading dot.
        description: One-line description shown by `.help`.
        multiline: Whether brace balance decides when the command is complete.
    """

    name: str
    description: str
    multiline: bool = False


class ReplCommandTable:
    """Immutable, ordered collection of REPL commands."""

    def __init__(self, commands: tuple[ReplCommand, ...]) -> None:
        self._commands = tuple(commands)

    def __iter__(self) -> Iterator[ReplCommand]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def names(self) -> list[str]:
        """Command names in table order."""
        return [cmd.name for cmd in self._commands]

    def multiline_triggers(self) -> frozenset[str]:
        """Names of the commands that enable multiline brace tracking."""
        return frozenset(cmd.name for cmd in self._commands if cmd.multiline)


REPL_COMMANDS = ReplCommandTable(
    (
        ReplCommand(".info", "Print system-wide information"),
        ReplCommand(".set", "Modify the configuration temporarily"),
        ReplCommand(".model", "Choose a model"),
        ReplCommand(".prompt", "Add a GPT prompt", multiline=True),
        ReplCommand(".role", "Select a role"),
        ReplCommand(".clear role", "Clear the currently selected role"),
        ReplCommand(".conversation", "Start a conversation"),
        ReplCommand(".clear conversation", "End current conversation"),
        ReplCommand(".clear screen", "Clear the screen"),
        ReplCommand(".copy", "Copy the last output to the clipboard"),
        ReplCommand(".read", "Read the contents of a file and submit"),
        ReplCommand(".edit", "Multi-line editing (Ctrl+S to finish)", multiline=True),
        ReplCommand(".help", "Print this help message"),
        ReplCommand(".exit", "Exit the REPL"),
    )
)
