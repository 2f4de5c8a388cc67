"""
REPL prompt module.

Renders the prompt segments from the shared session state: the active role
on the left, the remaining conversation tokens on the right, and an
indicator glyph that tells chat mode apart from command mode.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chatshell.cli.repl.context import ReplContext

# Indicator shown while a conversation is active
CHAT_INDICATOR = "＄"
# Indicator shown otherwise
COMMAND_INDICATOR = "〉"

DEFAULT_MULTILINE_INDICATOR = "::: "


class HistorySearchStatus(Enum):
    PASSING = "passing"
    FAILING = "failing"


class ReplPrompt:
    """
    Builds prompt text from the REPL context.

    Nothing is cached: each render reads the context under its lock, copies
    the field it needs and releases the lock before formatting.

    Attributes:
        _context: The REPL context containing role and conversation state.
    """

    def __init__(self, context: "ReplContext") -> None:
        """
        Initialize with REPL context.

        Args:
            context: The REPL context to read session state from.
        """
        self._context = context

    def render_left(self) -> str:
        """Active role name, or an empty string."""
        with self._context.locked() as ctx:
            role = ctx.role
        return role.name if role is not None else ""

    def render_right(self) -> str:
        """Remaining conversation tokens, or an empty string."""
        with self._context.locked() as ctx:
            conversation = ctx.conversation
            remaining = conversation.remaining_tokens() if conversation is not None else None
        return str(remaining) if remaining is not None else ""

    def render_indicator(self) -> str:
        with self._context.locked() as ctx:
            in_conversation = ctx.conversation is not None
        return CHAT_INDICATOR if in_conversation else COMMAND_INDICATOR

    def render_multiline_indicator(self) -> str:
        return DEFAULT_MULTILINE_INDICATOR

    def render_history_search(self, status: HistorySearchStatus, term: str) -> str:
        """
        Text shown while searching backward through history.

        Examples:
            "(reverse-search: abc) " when the term matches an entry,
            "(failing reverse-search: abc) " when it does not.
        """
        prefix = "failing " if status is HistorySearchStatus.FAILING else ""
        return f"({prefix}reverse-search: {term}) "

    def get_prompt(self) -> list[tuple[str, str]]:
        """
        Return prompt tokens for prompt_toolkit.

        Returns:
            List of (style_class, text) tuples for prompt_toolkit.
        """
        tokens: list[tuple[str, str]] = []

        left = self.render_left()
        if left:
            tokens.append(("class:prompt.role", left))

        tokens.append(("class:prompt.indicator", self.render_indicator()))
        return tokens

    def get_rprompt(self) -> list[tuple[str, str]]:
        right = self.render_right()
        if not right:
            return []
        return [("class:prompt.tokens", right)]

    def get_continuation(self, width: int, line_number: int, is_soft_wrap: bool) -> list[tuple[str, str]]:
        """Continuation prefix for lines after the first one."""
        return [("class:prompt.continuation", self.render_multiline_indicator())]
