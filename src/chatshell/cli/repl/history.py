"""
History persistence for the chatshell REPL.

Wraps prompt_toolkit's FileHistory with an entry cap and turns setup
failures into a single startup error.
"""

import logging
from itertools import islice
from pathlib import Path
from typing import Iterable

from prompt_toolkit.history import FileHistory

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 1000


class ReplSetupError(Exception):
    """Raised when the REPL cannot be initialized (e.g. history file setup)."""

    pass


class BoundedFileHistory(FileHistory):
    """
    File-backed history holding at most `max_entries` entries.

    Only the most recent entries are loaded into the session, and once a
    store pushes the file past the cap it is rewritten with the newest
    `max_entries` entries.

    Attributes:
        max_entries: Maximum number of entries kept in memory and on disk.
    """

    def __init__(self, filename: str | Path, max_entries: int = DEFAULT_HISTORY_SIZE) -> None:
        super().__init__(str(filename))
        self.max_entries = max_entries

    def load_history_strings(self) -> Iterable[str]:
        # FileHistory yields the most recent entry first.
        return islice(super().load_history_strings(), self.max_entries)

    def store_string(self, string: str) -> None:
        super().store_string(string)

        stored = list(FileHistory.load_history_strings(self))
        if len(stored) > self.max_entries:
            self._rewrite(reversed(stored[: self.max_entries]))

    def _rewrite(self, entries: Iterable[str]) -> None:
        """Replace the file contents with `entries`, oldest first."""
        with open(self.filename, "wb") as f:
            for entry in entries:
                f.write(b"\n")
                for line in entry.split("\n"):
                    f.write(f"+{line}\n".encode("utf-8"))
        logger.debug(f"Trimmed history file {self.filename} to {self.max_entries} entries")


def create_history(path: str | Path, max_entries: int = DEFAULT_HISTORY_SIZE) -> BoundedFileHistory:
    """
    Create the history store, ensuring the file can be opened.

    Args:
        path: Path to the history file. Parent directories are created.
        max_entries: Maximum number of entries kept.

    Returns:
        BoundedFileHistory backed by `path`.

    Raises:
        ReplSetupError: If the directory or file cannot be created or opened.
    """
    history_path = Path(path).expanduser()

    try:
        history_path.parent.mkdir(parents=True, exist_ok=True)
        # Touch in append mode so permission problems surface now, not on first submit
        with history_path.open("ab"):
            pass
    except OSError as e:
        raise ReplSetupError(f"Failed to setup history file '{history_path}': {e}") from e

    logger.debug(f"Using history file {history_path} (max {max_entries} entries)")
    return BoundedFileHistory(history_path, max_entries=max_entries)
