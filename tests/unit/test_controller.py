"""
Unit tests for the REPL controller loop.
"""

from unittest.mock import MagicMock

from rich.console import Console

from chatshell.cli.repl.controller import ReplController


def _controller(lines, dispatcher=None):
    frontend = MagicMock()
    frontend.read_line.side_effect = lines
    console = Console(record=True, width=120)
    return ReplController(frontend, console=console, dispatcher=dispatcher), console


class TestHandleInput:
    """Tests for per-line handling."""

    def test_empty_input_is_ignored(self):
        dispatcher = MagicMock()
        controller, _ = _controller([], dispatcher)

        assert controller.handle_input("   ") is True
        dispatcher.assert_not_called()

    def test_exit_stops_loop(self):
        controller, _ = _controller([])

        assert controller.handle_input(".exit") is False

    def test_help_prints_command_table(self):
        controller, console = _controller([])

        assert controller.handle_input(".help") is True
        output = console.export_text()
        assert ".prompt" in output
        assert "Available Commands" in output

    def test_other_lines_go_to_dispatcher(self):
        dispatcher = MagicMock()
        controller, _ = _controller([], dispatcher)

        assert controller.handle_input(" .prompt {\nhello\n} ") is True
        dispatcher.assert_called_once_with(".prompt {\nhello\n}")

    def test_default_dispatcher_echoes(self):
        controller, console = _controller([])

        controller.handle_input("[bold]hello[/bold]")

        assert "[bold]hello[/bold]" in console.export_text()


class TestRun:
    """Tests for the main loop."""

    def test_runs_until_exit(self):
        dispatcher = MagicMock()
        controller, console = _controller(["hello", ".exit", "never read"], dispatcher)

        controller.run()

        dispatcher.assert_called_once_with("hello")
        assert "Goodbye!" in console.export_text()

    def test_eof_ends_session(self):
        controller, console = _controller([EOFError()])

        controller.run()

        assert "Goodbye!" in console.export_text()

    def test_keyboard_interrupt_keeps_session(self):
        dispatcher = MagicMock()
        controller, console = _controller([KeyboardInterrupt(), "after", EOFError()], dispatcher)

        controller.run()

        dispatcher.assert_called_once_with("after")
        assert "Use '.exit' to leave." in console.export_text()
