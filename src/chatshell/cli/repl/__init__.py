"""
REPL module for the chatshell interactive shell.

This package provides the interactive input components: session context,
input validation, command completion, key bindings, dynamic prompts,
history persistence, the composed front-end and the main controller.
"""

from chatshell.cli.repl.completer import ReplCompleter
from chatshell.cli.repl.context import Conversation, ReplContext, Role
from chatshell.cli.repl.controller import ReplController
from chatshell.cli.repl.frontend import ReplFrontend
from chatshell.cli.repl.history import BoundedFileHistory, ReplSetupError, create_history
from chatshell.cli.repl.keybindings import KeyBindingPlan, Modifier
from chatshell.cli.repl.prompt import HistorySearchStatus, ReplPrompt
from chatshell.cli.repl.validator import ReplValidator, ValidationResult

__all__ = [
    "BoundedFileHistory",
    "Conversation",
    "HistorySearchStatus",
    "KeyBindingPlan",
    "Modifier",
    "ReplCompleter",
    "ReplContext",
    "ReplController",
    "ReplFrontend",
    "ReplPrompt",
    "ReplSetupError",
    "ReplValidator",
    "Role",
    "ValidationResult",
    "create_history",
]
