"""
REPL session state module.

Holds the mutable session fields (active role, active conversation) shared
between the command side of the REPL and the prompt renderer. All access goes
through a lock held only long enough to read or swap a field.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

from chatshell.core.config import ChatConfig


@dataclass(frozen=True)
class Role:
    """An active role: a named system prompt."""

    name: str
    prompt: str = ""


@dataclass
class Conversation:
    """
    An active conversation with a token budget.

    Attributes:
        max_tokens: Token budget of the model in use.
        tokens: Tokens consumed so far by the conversation.
    """

    max_tokens: int
    tokens: int = 0

    def add_tokens(self, count: int) -> None:
        self.tokens += count

    def remaining_tokens(self) -> int:
        """Tokens left before the budget is exhausted, never negative."""
        return max(self.max_tokens - self.tokens, 0)


@dataclass
class ReplContext:
    """
    Shared REPL session state.

    The front-end only reads from the context; commands executed by the
    dispatcher mutate it between prompts.

    Attributes:
        config: Loaded configuration.
        _role: The active role, or None.
        _conversation: The active conversation, or None.
        _lock: Guards _role and _conversation.
    """

    config: ChatConfig = field(default_factory=ChatConfig)
    _role: Optional[Role] = field(default=None, repr=False)
    _conversation: Optional[Conversation] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @contextmanager
    def locked(self) -> Iterator["ReplContext"]:
        """Hold the session lock for the duration of the block."""
        with self._lock:
            yield self

    @property
    def role(self) -> Optional[Role]:
        """Active role. Read this inside `locked()`."""
        return self._role

    @property
    def conversation(self) -> Optional[Conversation]:
        """Active conversation. Read this inside `locked()`."""
        return self._conversation

    def set_role(self, role: Role) -> None:
        with self._lock:
            self._role = role

    def clear_role(self) -> None:
        with self._lock:
            self._role = None

    def start_conversation(self, max_tokens: Optional[int] = None) -> Conversation:
        """
        Start a new conversation, replacing any active one.

        Args:
            max_tokens: Token budget; defaults to the configured max_tokens.

        Returns:
            The new conversation.
        """
        budget = self.config.repl.max_tokens if max_tokens is None else max_tokens
        conversation = Conversation(max_tokens=budget)
        with self._lock:
            self._conversation = conversation
        return conversation

    def end_conversation(self) -> None:
        with self._lock:
            self._conversation = None

    def repl_completions(self) -> list[str]:
        """Configuration-derived completion strings."""
        return self.config.repl_completions()
