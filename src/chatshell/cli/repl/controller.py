"""
REPL controller module for the chatshell interactive shell.

Drives the front-end: reads complete lines, handles the host commands the
front-end itself emits (`.clear screen`, `.help`, `.exit`) and hands every
other line to a dispatcher.
"""

import logging
from typing import Callable, Optional

from rich.console import Console

from chatshell.cli.commands import REPL_COMMANDS
from chatshell.cli.repl.frontend import ReplFrontend
from chatshell.cli.repl.keybindings import CLEAR_SCREEN_COMMAND
from chatshell.cli.ui import render_help, render_welcome_banner

logger = logging.getLogger(__name__)

# Receives each complete, non-empty line that is not a host command
Dispatcher = Callable[[str], None]


class ReplController:
    """
    Interactive REPL session controller.

    Attributes:
        frontend: Line-input front-end.
        console: Rich console for styled output.
        dispatcher: Callable receiving submitted lines.
    """

    def __init__(
        self,
        frontend: ReplFrontend,
        console: Optional[Console] = None,
        dispatcher: Optional[Dispatcher] = None,
    ):
        self.frontend = frontend
        self.console = console or Console()
        self.dispatcher = dispatcher or self._echo

    def _echo(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False)

    def run(self) -> None:
        """
        Start the REPL main loop.

        Runs until `.exit` is entered or Ctrl+D is pressed. Ctrl+C discards
        the current input and keeps the session alive.
        """
        render_welcome_banner(self.console)
        self.console.print()

        while True:
            try:
                user_input = self.frontend.read_line()
            except KeyboardInterrupt:
                self.console.print("[yellow]Use '.exit' to leave.[/yellow]")
                continue
            except EOFError:
                self.console.print("[cyan]Goodbye![/cyan]")
                break

            if not self.handle_input(user_input):
                break

    def handle_input(self, user_input: str) -> bool:
        """
        Process one submitted line.

        Args:
            user_input: Raw input string from the front-end.

        Returns:
            True to continue the REPL, False to exit.
        """
        stripped = user_input.strip()
        if not stripped:
            return True

        if stripped == ".exit":
            self.console.print("[cyan]Goodbye![/cyan]")
            return False
        if stripped == CLEAR_SCREEN_COMMAND:
            self.console.clear()
            return True
        if stripped == ".help":
            render_help(REPL_COMMANDS, self.console)
            return True

        logger.debug(f"Dispatching input ({len(stripped)} chars)")
        self.dispatcher(stripped)
        return True
