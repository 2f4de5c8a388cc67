"""
Input completeness validator for the REPL.

Decides whether the buffer can be submitted or needs another line. This is a
lexical heuristic rather than a parser: it tracks double-quote parity for
every input and curly-brace balance for commands that enable multiline
input. Braces inside quoted strings still count toward the balance.
"""

from enum import Enum
from typing import Iterable


class ValidationResult(Enum):
    """Outcome of validating the input buffer."""

    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


def incomplete_brackets(line: str, multiline_commands: Iterable[str]) -> bool:
    """
    Check whether a multiline command has unclosed braces.

    Only input starting (after leading whitespace) with one of
    `multiline_commands` is inspected; anything else is never incomplete.
    A `}` closes the innermost open `{`; a `}` with nothing to close is
    ignored.

    Args:
        line: The full input buffer, possibly spanning several lines.
        multiline_commands: Command names that trigger brace tracking.

    Returns:
        True if at least one `{` is left open.
    """
    line = line.lstrip()
    if not any(line.startswith(cmd) for cmd in multiline_commands):
        return False

    balance: list[str] = []
    for char in line:
        if char == "{":
            balance.append("}")
        elif char == "}" and balance and balance[-1] == char:
            balance.pop()

    return bool(balance)


class ReplValidator:
    """
    Validates the REPL input buffer on submit.

    Attributes:
        multiline_commands: Frozen set of trigger command names.
    """

    def __init__(self, multiline_commands: Iterable[str]) -> None:
        self.multiline_commands = frozenset(multiline_commands)

    def validate(self, line: str) -> ValidationResult:
        """
        Classify the buffer as complete or incomplete.

        An odd number of double quotes always means an unterminated string,
        whatever the command.
        """
        if line.count('"') % 2 == 1 or incomplete_brackets(line, self.multiline_commands):
            return ValidationResult.INCOMPLETE
        return ValidationResult.COMPLETE

    def is_complete(self, line: str) -> bool:
        return self.validate(line) is ValidationResult.COMPLETE
