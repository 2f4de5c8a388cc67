"""
REPL key binding plan.

A fixed table from key chords to actions, plus the glue that installs the
table into prompt_toolkit. Chords missing from the table keep the engine's
emacs defaults.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from prompt_toolkit.completion import CompleteEvent, get_common_complete_suffix
from prompt_toolkit.key_binding import KeyBindings

from chatshell.cli.repl.validator import ReplValidator

logger = logging.getLogger(__name__)

MENU_NAME = "completion_menu"

CLEAR_SCREEN_COMMAND = ".clear screen"


class Modifier(Enum):
    NONE = "none"
    CONTROL = "control"
    ALT = "alt"
    SHIFT = "shift"


@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class OpenMenu:
    name: str = MENU_NAME


@dataclass(frozen=True)
class MenuNext:
    pass


@dataclass(frozen=True)
class ExecuteHostCommand:
    """Submit `command` as if the user had typed it."""

    command: str


@dataclass(frozen=True)
class EngineDefault:
    """Leave the chord to the line-editing engine."""


@dataclass(frozen=True)
class UntilFound:
    """Try each action in order; the first one that applies wins."""

    actions: tuple["Action", ...]


Action = Union[InsertChar, OpenMenu, MenuNext, ExecuteHostCommand, EngineDefault, UntilFound]

KeyChord = tuple[Modifier, str]


def default_bindings() -> dict[KeyChord, Action]:
    return {
        (Modifier.NONE, "tab"): UntilFound((OpenMenu(MENU_NAME), MenuNext())),
        (Modifier.CONTROL, "l"): ExecuteHostCommand(CLEAR_SCREEN_COMMAND),
    }


class KeyBindingPlan:
    """
    Static chord-to-action table.

    Attributes:
        _table: Mapping of (modifier, key) to action. Not modified after
            construction.
    """

    def __init__(self, bindings: Optional[dict[KeyChord, Action]] = None) -> None:
        self._table = dict(default_bindings() if bindings is None else bindings)

    def bindings(self) -> list[tuple[KeyChord, Action]]:
        """Explicit bindings in table order."""
        return list(self._table.items())

    def resolve_key(self, modifier: Modifier, key: str) -> Action:
        """
        Resolve a chord to an action.

        Unbound printable characters without modifiers insert themselves;
        every other unbound chord falls through to the engine default.
        """
        lookup = key.lower() if modifier is not Modifier.NONE else key
        action = self._table.get((modifier, lookup))
        if action is not None:
            return action
        if modifier is Modifier.NONE and len(key) == 1 and key.isprintable():
            return InsertChar(key)
        return EngineDefault()


def to_prompt_toolkit_keys(modifier: Modifier, key: str) -> tuple[str, ...]:
    """Translate a chord to the key sequence prompt_toolkit expects."""
    if modifier is Modifier.CONTROL:
        return (f"c-{key.lower()}",)
    if modifier is Modifier.ALT:
        return ("escape", key)
    if modifier is Modifier.SHIFT:
        return (f"s-{key.lower()}",)
    return (key,)


def _open_menu(buffer) -> None:
    """
    Complete the word under the cursor, then show the menu.

    A single candidate is inserted outright. Several candidates first get
    their common part inserted, then the menu opens on the rest. Runs the
    completer synchronously so keys typed after Tab see the inserted text.
    """
    if buffer.completer is None:
        return

    document = buffer.document
    completions = list(
        buffer.completer.get_completions(document, CompleteEvent(completion_requested=True))
    )
    if not completions:
        return
    if len(completions) == 1:
        buffer.apply_completion(completions[0])
        return

    common_part = get_common_complete_suffix(document, completions)
    if common_part:
        buffer.insert_text(common_part)
    buffer.start_completion(select_first=False)


def run_action(action: Action, event) -> bool:
    """
    Apply an action to a key press event.

    Returns:
        True if the action applied, False if it did not (used by UntilFound).
    """
    buffer = event.current_buffer

    if isinstance(action, UntilFound):
        return any(run_action(candidate, event) for candidate in action.actions)
    if isinstance(action, OpenMenu):
        if buffer.complete_state is not None:
            return False
        _open_menu(buffer)
        return True
    if isinstance(action, MenuNext):
        if buffer.complete_state is None:
            return False
        buffer.complete_next()
        return True
    if isinstance(action, ExecuteHostCommand):
        logger.debug(f"Host command from key binding: {action.command}")
        event.app.exit(result=action.command)
        return True
    if isinstance(action, InsertChar):
        buffer.insert_text(action.char)
        return True
    return False


def create_key_bindings(plan: KeyBindingPlan, validator: ReplValidator) -> KeyBindings:
    """Create prompt_toolkit key bindings for the plan."""
    kb = KeyBindings()

    for (modifier, key), action in plan.bindings():
        if isinstance(action, EngineDefault):
            continue

        def handler(event, action=action) -> None:
            run_action(action, event)

        kb.add(*to_prompt_toolkit_keys(modifier, key))(handler)

    @kb.add("enter")
    def _(event) -> None:
        """Enter: submit when complete, otherwise continue on a new line."""
        buffer = event.current_buffer
        state = buffer.complete_state
        if state is not None and state.current_completion is not None:
            # Accept the highlighted candidate; submitting takes another Enter
            buffer.complete_state = None
            return
        if validator.is_complete(buffer.text):
            buffer.validate_and_handle()
        else:
            buffer.insert_text("\n")

    return kb
