"""
Path utilities for chatshell.

Provides the locations of the configuration directory, config file and
REPL history file.
"""

import os
from pathlib import Path

# Environment variable that relocates the whole configuration directory
CONFIG_DIR_ENV = "CHATSHELL_CONFIG_DIR"

CONFIG_FILE_NAME = "config.yaml"
HISTORY_FILE_NAME = "history.txt"


def get_config_dir() -> Path:
    """
    Get the chatshell configuration directory.

    Resolution order:
    1. $CHATSHELL_CONFIG_DIR
    2. $XDG_CONFIG_HOME/chatshell
    3. ~/.config/chatshell

    Returns:
        Path to the configuration directory (not guaranteed to exist).
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_home:
        return Path(xdg_home).expanduser() / "chatshell"

    return Path.home() / ".config" / "chatshell"


def get_config_file() -> Path:
    """Return the default config file path inside the config directory."""
    return get_config_dir() / CONFIG_FILE_NAME


def get_history_file() -> Path:
    """Return the default REPL history file path inside the config directory."""
    return get_config_dir() / HISTORY_FILE_NAME

