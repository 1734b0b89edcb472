#!/usr/bin/env python3
"""Layered configuration manager for stest.

Configuration is assembled from several sources with precedence:
1. Compiled defaults (lowest)
2. User config file (YAML)
3. Environment variables (STEST_<SECTION>_<KEY>)
4. CLI arguments (highest)

Example:
    >>> config = ConfigManager()
    >>> config.load_file("~/.config/stest/config.yaml")
    >>> config.get("logging.level", default="WARNING")
    >>> config.get("defaults.hidden", default=False)
"""

import copy
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from stest.core.constants import DEFAULT_CONFIG, OPTION_FLAGS, ConfigKey, ErrorCode
from stest.core.logging import get_logger
from stest.core.validators import ValidationError, validate_config

ENV_PREFIX = "STEST_"

# Section -> keys that may be set from the environment
ENV_KEYS = {
    ConfigKey.LOGGING: frozenset({ConfigKey.LOG_LEVEL, ConfigKey.LOG_FILE}),
    ConfigKey.DEFAULTS: frozenset(OPTION_FLAGS),
}


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


def default_config_path() -> Path:
    """Return the per-user config file location.

    Honours XDG_CONFIG_HOME and falls back to ~/.config.
    """
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join("~", ".config")
    return Path(base).expanduser() / "stest" / "config.yaml"


class ConfigManager:
    """Hierarchical configuration manager.

    Each source holds a nested dictionary; lookups walk the sources from
    highest to lowest precedence and return the first value found.
    """

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            load_environment: Whether to read STEST_* environment variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {
            ConfigSource.COMPILED_DEFAULTS: copy.deepcopy(DEFAULT_CONFIG)
        }

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        An empty file is treated as an empty configuration.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded, parsed or validated
        """
        path = Path(file_path).expanduser()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error reading config {file_path}: {e}", ErrorCode.PERMISSION_DENIED)

        if config_data is None:
            config_data = {}

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self.load_dict(config_data, source)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level

        Raises:
            ConfigError: If the dictionary fails validation
        """
        try:
            validate_config(config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration ({source.name.lower()}): {e}", e.error_code)

        self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Environment variables in format: STEST_SECTION_KEY=value
        Example: STEST_LOGGING_LEVEL=DEBUG, STEST_DEFAULTS_NOT_EMPTY=true

        Variables that do not name a known section and key are skipped, so
        unrelated STEST_* variables in the environment are harmless.
        """
        env_config: Dict[str, Dict[str, Any]] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            # Section is the first component, the rest is the key name
            parts = key[len(ENV_PREFIX):].lower().split("_", 1)
            if len(parts) != 2 or not all(parts):
                continue

            section, name = parts
            if name not in ENV_KEYS.get(section, ()):
                get_logger().debug("Ignoring environment variable", variable=key)
                continue

            env_config.setdefault(section, {})[name] = self._parse_env_value(value)

        if env_config:
            self.load_dict(env_config, ConfigSource.ENVIRONMENT)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (bool or str)
        """
        if value.lower() in ("true", "yes", "on", "1"):
            return True
        if value.lower() in ("false", "no", "off", "0"):
            return False
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
            value = self._get_nested(self._config[source], key)
            if value is not None:
                return value

        return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        """Get value from nested dictionary using dot notation."""
        current: Any = config

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]

        return current

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources."""
        merged: Dict[str, Any] = {}

        # Merge from lowest to highest precedence
        for source in sorted(self._config.keys(), key=lambda s: s.value):
            merged = self._deep_merge(merged, self._config[source])

        return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def option_defaults(self) -> Dict[str, bool]:
        """Return the merged `defaults` section as option name -> bool."""
        defaults = self.get_all().get("defaults") or {}
        return {name: bool(value) for name, value in defaults.items()}

