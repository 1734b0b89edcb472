"""stest Core - Shared utilities used throughout the package.

Import specific functions from submodules:
    from stest.core.config import ConfigManager
    from stest.core import constants
    from stest.core import logging
    from stest.core import validators
"""

# Re-export main module references for convenience
from stest.core import (
    config,
    constants,
    logging,
    validators,
)

__all__ = [
    "config",
    "constants",
    "logging",
    "validators",
]
