"""
REPL front-end module.

Composes the validator, completer, key binding plan, prompt and history into
a prompt_toolkit session ready to read one logical line at a time.
"""

import logging
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.application.current import get_app
from prompt_toolkit.history import History
from prompt_toolkit.shortcuts import CompleteStyle
from prompt_toolkit.styles import Style

from chatshell.cli.commands import REPL_COMMANDS, ReplCommandTable
from chatshell.cli.repl.completer import ReplCompleter
from chatshell.cli.repl.context import ReplContext
from chatshell.cli.repl.history import create_history
from chatshell.cli.repl.keybindings import Action, KeyBindingPlan, Modifier, create_key_bindings
from chatshell.cli.repl.prompt import HistorySearchStatus, ReplPrompt
from chatshell.cli.repl.validator import ReplValidator, ValidationResult

logger = logging.getLogger(__name__)


PROMPT_STYLE = Style.from_dict({
    "prompt.role": "#00aaaa bold",
    "prompt.indicator": "#00aa00 bold",
    "prompt.tokens": "#888888",
    "prompt.continuation": "#888888",
    "bottom-toolbar": "noreverse #aaaa00",
})


class ReplFrontend:
    """
    Line-input session for the REPL.

    Attributes:
        validator: Decides when the buffer is complete.
        completer: Completion source over commands and config completions.
        key_plan: Static key binding table.
        prompt: Prompt renderer over the shared context.
        history: Persistent input history.
        session: The underlying prompt_toolkit session.
    """

    def __init__(
        self,
        validator: ReplValidator,
        completer: ReplCompleter,
        key_plan: KeyBindingPlan,
        prompt: ReplPrompt,
        history: History,
    ):
        self.validator = validator
        self.completer = completer
        self.key_plan = key_plan
        self.prompt = prompt
        self.history = history

        self.session: PromptSession = PromptSession(
            history=history,
            completer=completer,
            key_bindings=create_key_bindings(key_plan, validator),
            style=PROMPT_STYLE,
            multiline=True,
            prompt_continuation=prompt.get_continuation,
            rprompt=prompt.get_rprompt,
            bottom_toolbar=self._bottom_toolbar,
            complete_while_typing=True,
            complete_style=CompleteStyle.MULTI_COLUMN,
        )

    @classmethod
    def create(
        cls,
        context: ReplContext,
        history_file: Optional[Path | str] = None,
        history_size: Optional[int] = None,
        commands: ReplCommandTable = REPL_COMMANDS,
    ) -> "ReplFrontend":
        """
        Build a front-end from the session context.

        Args:
            context: Shared session state and configuration.
            history_file: History path. Defaults to the configured one.
            history_size: Maximum history entries loaded. Defaults to config.
            commands: Static command table.

        Raises:
            ReplSetupError: If the history file cannot be set up.
        """
        repl_config = context.config.repl
        path = history_file or repl_config.resolved_history_file()
        size = history_size if history_size is not None else repl_config.history_size

        validator = ReplValidator(commands.multiline_triggers())
        completer = ReplCompleter(commands.names(), context.repl_completions())
        history = create_history(path, size)

        logger.debug(f"REPL front-end ready (history: {path})")
        return cls(validator, completer, KeyBindingPlan(), ReplPrompt(context), history)

    def validate(self, line: str) -> ValidationResult:
        return self.validator.validate(line)

    def complete(self, buffer: str, cursor: int) -> list[str]:
        return self.completer.complete(buffer, cursor)

    def resolve_key(self, modifier: Modifier, key: str) -> Action:
        return self.key_plan.resolve_key(modifier, key)

    def render_left(self) -> str:
        return self.prompt.render_left()

    def render_right(self) -> str:
        return self.prompt.render_right()

    def render_indicator(self) -> str:
        return self.prompt.render_indicator()

    def render_multiline_indicator(self) -> str:
        return self.prompt.render_multiline_indicator()

    def render_history_search(self, status: HistorySearchStatus, term: str) -> str:
        return self.prompt.render_history_search(status, term)

    def history_search_text(self, term: str) -> str:
        """
        History-search indicator for `term`.

        The search passes when any loaded history entry contains the term.
        """
        found = any(term in entry for entry in self.history.get_strings())
        status = HistorySearchStatus.PASSING if found else HistorySearchStatus.FAILING
        return self.prompt.render_history_search(status, term)

    def _bottom_toolbar(self):
        app = get_app()
        if not app.layout.is_searching:
            return None
        return self.history_search_text(self.session.search_buffer.text)

    def read_line(self) -> str:
        """
        Read one logical line, which may span several physical lines.

        Raises:
            KeyboardInterrupt: On Ctrl+C.
            EOFError: On Ctrl+D with an empty buffer.
        """
        return self.session.prompt(self.prompt.get_prompt)
