"""
stest Core: Input Validators.

This module provides validation functions for the configuration file and
for the reference paths handed to the newer/older tests.
"""
from typing import Any, Dict

from stest.core.constants import LOG_LEVELS, OPTION_FLAGS, ConfigKey, ErrorCode


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate stest configuration structure.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    unknown = set(config) - {ConfigKey.LOGGING, ConfigKey.DEFAULTS}
    if unknown:
        raise ValidationError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

    if ConfigKey.LOGGING in config:
        validate_logging_config(config[ConfigKey.LOGGING])

    if ConfigKey.DEFAULTS in config:
        validate_defaults_config(config[ConfigKey.DEFAULTS])

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate the logging section.

    Args:
        logging_config: Logging configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If the section is invalid
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    unknown = set(logging_config) - {ConfigKey.LOG_LEVEL, ConfigKey.LOG_FILE}
    if unknown:
        raise ValidationError(
            f"Unknown logging configuration fields: {', '.join(sorted(unknown))}"
        )

    level = logging_config.get(ConfigKey.LOG_LEVEL)
    if level is not None:
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ValidationError(f"Invalid log level: {level}. Must be one of {LOG_LEVELS}")

    log_file = logging_config.get(ConfigKey.LOG_FILE)
    if log_file is not None:
        validate_path(log_file)

    return True


def validate_defaults_config(defaults: Dict[str, Any]) -> bool:
    """Validate the defaults section.

    Every key must name a boolean option and every value must be a boolean.

    Raises:
        ValidationError: If the section is invalid
    """
    if not isinstance(defaults, dict):
        raise ValidationError("Defaults must be a dictionary")

    for key, value in defaults.items():
        if key not in OPTION_FLAGS:
            raise ValidationError(f"Unknown option in defaults: {key}")
        if not isinstance(value, bool):
            raise ValidationError(f"Default for {key} must be boolean: {value}")

    return True


def validate_path(path: str) -> bool:
    """Validate a filesystem path argument.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path)}")

    if not path:
        raise ValidationError("Path cannot be empty")

    # Check for null bytes
    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    return True
