"""
stest Core: Constants and Type Definitions

This module provides package-wide constants, error codes, exit codes and
the file type classification used by the predicate checks.
"""
import stat
from enum import Enum, IntEnum
from typing import TypeAlias

# Version information
STEST_VERSION = "1.0.0"


# Error codes attached to every stest exception
class ErrorCode(IntEnum):
    """Standardized error codes for stest operations."""

    INVALID_INPUT = 1  # Bad path, invalid configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    UNSUPPORTED = 4  # Requested mode is not implemented


class ExitCode(IntEnum):
    """Process exit status reported by the command-line tool."""

    PASSED = 0  # At least one entry passed
    FAILED = 1  # No entry passed
    ERROR = 2  # Usage, configuration or fatal runtime error
    INTERRUPTED = 130


# Type aliases for clarity
FilePath: TypeAlias = str
DisplayName: TypeAlias = str

# Conventional hidden-file marker
HIDDEN_PREFIX = "."


# File type classification
class FileType(Enum):
    """File type classification derived from raw mode bits."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BLOCK_DEVICE = "block"
    CHARACTER_DEVICE = "char"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"

    @classmethod
    def from_mode(cls, mode: int) -> "FileType":
        """Determine file type from mode."""
        if stat.S_ISREG(mode):
            return cls.REGULAR
        elif stat.S_ISDIR(mode):
            return cls.DIRECTORY
        elif stat.S_ISLNK(mode):
            return cls.SYMLINK
        elif stat.S_ISBLK(mode):
            return cls.BLOCK_DEVICE
        elif stat.S_ISCHR(mode):
            return cls.CHARACTER_DEVICE
        elif stat.S_ISFIFO(mode):
            return cls.FIFO
        elif stat.S_ISSOCK(mode):
            return cls.SOCKET
        else:
            return cls.UNKNOWN


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    LOGGING = "logging"
    DEFAULTS = "defaults"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"


# Boolean options that may be pre-enabled from the `defaults` config section
OPTION_FLAGS = (
    "hidden",
    "block_special",
    "char_special",
    "directory",
    "regular",
    "set_gid",
    "symbolic_link",
    "dir_contents",
    "fifo",
    "quiet",
    "readable",
    "not_empty",
    "set_uid",
    "invert",
    "writable",
    "executable",
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.LOGGING: {
        ConfigKey.LOG_LEVEL: "WARNING",
        ConfigKey.LOG_FILE: None,
    },
    ConfigKey.DEFAULTS: {},
}
