"""
Core Layer - Configuration and path helpers shared by the CLI and REPL.
"""

from chatshell.core.config import (
    ChatConfig,
    LoggingConfig,
    ReplConfig,
    RoleConfig,
    load_config,
    setup_logging,
)
from chatshell.core.path_utils import (
    get_config_dir,
    get_config_file,
    get_history_file,
)

__all__ = [
    "ChatConfig",
    "LoggingConfig",
    "ReplConfig",
    "RoleConfig",
    "get_config_dir",
    "get_config_file",
    "get_history_file",
    "load_config",
    "setup_logging",
]
