"""
UI components module for the chatshell REPL.

Provides styled terminal output using Rich library for the welcome banner,
help display, and error rendering.
"""

from typing import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from chatshell import __version__
from chatshell.cli.commands import ReplCommand


def render_welcome_banner(console: Console) -> None:
    """
    Render the welcome banner.

    Args:
        console: Rich Console instance for output.
    """
    welcome_content = Text()
    welcome_content.append("chatshell", style="bold white")
    welcome_content.append(f" v{__version__}\n\n", style="dim")
    welcome_content.append("Type ", style="white")
    welcome_content.append(".help", style="bold green")
    welcome_content.append(" for available commands, ", style="white")
    welcome_content.append(".exit", style="bold yellow")
    welcome_content.append(" to quit.", style="white")

    console.print(
        Panel(
            welcome_content,
            border_style="cyan",
            padding=(0, 2),
        )
    )


def render_help(commands: Iterable[ReplCommand], console: Console) -> None:
    """
    Render the command table.

    Commands are listed in table order; multiline commands are marked.

    Args:
        commands: Commands to display.
        console: Rich Console instance for output.
    """
    table = Table(
        title="Available Commands",
        title_style="bold cyan",
        border_style="blue",
        show_header=True,
        header_style="bold white",
    )

    table.add_column("Command", style="green", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Multiline", style="dim cyan", justify="center")

    for cmd in commands:
        table.add_row(cmd.name, cmd.description, "✓" if cmd.multiline else "")

    console.print(table)
    console.print()


def render_error(message: str, console: Console) -> None:
    """
    Render an error message in a visually distinct red panel.

    Args:
        message: Error message to display.
        console: Rich Console instance for output.
    """
    error_text = Text()
    error_text.append("Error: ", style="bold red")
    error_text.append(message, style="red")

    console.print(
        Panel(
            error_text,
            border_style="red",
            title="[bold red]Error[/bold red]",
            expand=False,
        )
    )
