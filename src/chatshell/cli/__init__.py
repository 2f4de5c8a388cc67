"""
CLI for chatshell.

Provides the command-line entry point for the interactive chat REPL.
"""

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

from chatshell.cli.commands import REPL_COMMANDS
from chatshell.cli.repl import ReplContext, ReplController, ReplFrontend, ReplSetupError
from chatshell.cli.ui import render_error, render_help
from chatshell.core.config import ChatConfig, load_config, setup_logging
from chatshell.core.path_utils import get_config_file

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="chatshell",
    help="chatshell - interactive chat REPL",
    add_completion=False,
)


def _load_config(config_path: Optional[Path]) -> ChatConfig:
    """Load the explicit config file, else the default one if it exists."""
    if config_path is None:
        default_path = get_config_file()
        config_path = default_path if default_path.exists() else None
    return load_config(config_path)


@app.command()
def shell(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
    history_file: Optional[Path] = typer.Option(
        None, "--history-file", help="Path to the REPL history file"
    ),
):
    """Start the interactive REPL."""
    try:
        config = _load_config(config_path)
        setup_logging(config.logging)

        context = ReplContext(config=config)
        frontend = ReplFrontend.create(context, history_file=history_file)
        ReplController(frontend, console=console).run()

    except KeyboardInterrupt:
        console.print("\n[cyan]Goodbye![/cyan]")
    except (ReplSetupError, OSError, ValueError, yaml.YAMLError) as e:
        render_error(str(e), console)
        raise typer.Exit(1)


@app.command("commands")
def list_commands():
    """List the REPL dot-commands."""
    render_help(REPL_COMMANDS, console)


if __name__ == "__main__":
    app()
