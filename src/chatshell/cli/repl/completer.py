"""
Command completer module for the chatshell REPL.

Provides tab completion over a fixed vocabulary made of the REPL command
names and completions derived from the configuration (role and model names).
"""

import logging
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion

logger = logging.getLogger(__name__)

# Characters treated as part of a word in addition to alphanumerics
DEFAULT_INCLUSIONS = ".-_"

# Vocabulary entries shorter than this never match
DEFAULT_MIN_WORD_LEN = 2


class ReplCompleter(Completer):
    """
    Prefix completer over an immutable vocabulary.

    The vocabulary is built once at construction: command names first, then
    the extra completions, deduplicated in insertion order. To pick up new
    configuration values, build a new completer.
    """

    def __init__(
        self,
        commands: Iterable[str],
        extra_completions: Iterable[str] = (),
        inclusions: str = DEFAULT_INCLUSIONS,
        min_word_len: int = DEFAULT_MIN_WORD_LEN,
    ):
        """
        Initialize the completer.

        Args:
            commands: Static command names.
            extra_completions: Configuration-derived completion strings.
            inclusions: Non-alphanumeric characters that belong to a word.
            min_word_len: Minimum length of a vocabulary entry.
        """
        self.inclusions = frozenset(inclusions)
        self.min_word_len = min_word_len

        merged = dict.fromkeys([*commands, *extra_completions])
        self._vocabulary = tuple(word for word in merged if len(word) >= min_word_len)
        logger.debug(f"Completion vocabulary built with {len(self._vocabulary)} entries")

    @property
    def vocabulary(self) -> tuple[str, ...]:
        """The completion vocabulary, in insertion order."""
        return self._vocabulary

    def _is_word_char(self, char: str) -> bool:
        return char.isalnum() or char in self.inclusions

    def current_word(self, buffer: str, cursor: int) -> str:
        """
        Return the word ending at the cursor.

        Args:
            buffer: Full input text.
            cursor: Cursor position as an index into `buffer`.

        Returns:
            The run of word characters immediately before the cursor.
        """
        cursor = max(0, min(cursor, len(buffer)))
        start = cursor
        while start > 0 and self._is_word_char(buffer[start - 1]):
            start -= 1
        return buffer[start:cursor]

    def complete(self, buffer: str, cursor: int) -> list[str]:
        """
        List vocabulary entries that extend the word under the cursor.

        An empty word yields no candidates.
        """
        word = self.current_word(buffer, cursor)
        if not word:
            return []
        return [candidate for candidate in self._vocabulary if candidate.startswith(word)]

    def get_completions(self, document, complete_event):
        """Generate completions for the current input."""
        word = self.current_word(document.text, document.cursor_position)
        for candidate in self.complete(document.text, document.cursor_position):
            yield Completion(candidate, start_position=-len(word))
