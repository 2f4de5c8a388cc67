"""
Configuration module for chatshell.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from chatshell.core.path_utils import get_history_file

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    return section_defaults.get(key, fallback)


def _get_default_list(section: str) -> list:
    """Get a top-level list section from the defaults config."""
    value = _load_defaults().get(section) or []
    return list(value)


@dataclass
class ReplConfig:
    """Configuration for the interactive REPL."""

    history_file: str = field(default_factory=lambda: _get_default("repl", "history_file", ""))
    history_size: int = field(default_factory=lambda: _get_default("repl", "history_size", 1000))
    model: str = field(default_factory=lambda: _get_default("repl", "model", "gpt-3.5-turbo"))
    max_tokens: int = field(default_factory=lambda: _get_default("repl", "max_tokens", 4096))

    def resolved_history_file(self) -> Path:
        """Return the history path, falling back to the config directory."""
        if self.history_file:
            return Path(self.history_file).expanduser()
        return get_history_file()


@dataclass
class RoleConfig:
    """A named role: a system prompt the user can switch to with `.role`."""

    name: str
    prompt: str = ""
    temperature: Optional[float] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


def _build_section(section: str, section_cls: type, values: Any) -> Any:
    """Instantiate a config section, reporting bad shapes as ValueError."""
    if not isinstance(values, dict):
        raise ValueError(f"Invalid '{section}' config: expected a mapping")
    try:
        return section_cls(**values)
    except TypeError as e:
        raise ValueError(f"Invalid '{section}' config: {e}") from e


@dataclass
class ChatConfig:
    """Main configuration class for chatshell."""

    repl: ReplConfig = field(default_factory=ReplConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    models: list[str] = field(default_factory=lambda: _get_default_list("models"))
    roles: list[RoleConfig] = field(
        default_factory=lambda: [RoleConfig(**r) for r in _get_default_list("roles")]
    )

    @classmethod
    def from_file(cls, path: Path | str) -> "ChatConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            ChatConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "ChatConfig":
        """
        Create ChatConfig from a dictionary.

        Raises:
            ValueError: If a section has the wrong shape or unknown keys
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config: expected a mapping, got {type(data).__name__}")

        config = cls()

        if "repl" in data:
            config.repl = _build_section("repl", ReplConfig, data["repl"])
        if "logging" in data:
            config.logging = _build_section("logging", LoggingConfig, data["logging"])
        if "models" in data:
            models = data["models"] or []
            if not isinstance(models, list):
                raise ValueError("Invalid 'models' config: expected a list")
            config.models = [str(m) for m in models]
        if "roles" in data:
            roles = data["roles"] or []
            if not isinstance(roles, list):
                raise ValueError("Invalid 'roles' config: expected a list")
            config.roles = [_build_section("roles", RoleConfig, r) for r in roles]

        return config

    def apply_env_overrides(self) -> "ChatConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: CHATSHELL_<SECTION>_<KEY>
        Examples:
            - CHATSHELL_REPL_HISTORY_FILE
            - CHATSHELL_REPL_HISTORY_SIZE
            - CHATSHELL_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # REPL config
            "CHATSHELL_REPL_HISTORY_FILE": ("repl", "history_file", str),
            "CHATSHELL_REPL_HISTORY_SIZE": ("repl", "history_size", int),
            "CHATSHELL_REPL_MODEL": ("repl", "model", str),
            "CHATSHELL_REPL_MAX_TOKENS": ("repl", "max_tokens", int),
            # Logging config
            "CHATSHELL_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def get_role(self, name: str) -> Optional[RoleConfig]:
        """Look up a configured role by name."""
        for role in self.roles:
            if role.name == name:
                return role
        return None

    def repl_completions(self) -> list[str]:
        """
        Extra completion strings derived from the configuration.

        Role names come first, followed by model names. Duplicates are
        left in place; the completer deduplicates.
        """
        completions = [role.name for role in self.roles]
        completions.extend(self.models)
        return completions

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> ChatConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        ChatConfig instance
    """
    if config_path:
        config = ChatConfig.from_file(config_path)
    else:
        config = ChatConfig()

    if apply_env:
        config.apply_env_overrides()

    return config


def setup_logging(config: LoggingConfig) -> None:
    """Configure root logging from the logging section."""
    level = getattr(logging, config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=config.format)
