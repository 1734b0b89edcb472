#!/usr/bin/env python3
"""Structured logging for stest.

Diagnostics are written to standard error so they never mix with the
names stest prints on standard output. Messages carry key=value context:

Example:
    >>> logger = Logger(level=LogLevel.DEBUG)
    >>> logger.debug("Check failed", check="regular", path="a.txt")
    >>> with logger.add_context(path="a.txt"):
    ...     logger.debug("Evaluating candidate")
"""

import logging
import logging.handlers
import sys
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50

    @classmethod
    def parse(cls, level: Union["LogLevel", int, str]) -> "LogLevel":
        """Coerce a level name or number into a LogLevel."""
        if isinstance(level, str):
            return cls[level.upper()]
        return cls(level)


class Logger:
    """Structured logger with context support.

    Wraps a standard library logger. Context pushed with add_context() is
    thread-local and is merged into every message logged inside the block.
    """

    # Thread-local storage for context
    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "stest",
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output
            handlers: Optional list of logging handlers (default: stderr)
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        # Keep stest output away from whatever the root logger does
        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        """Create the default stderr handler."""
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        """Add a new output handler."""
        self.logger.addHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: New log level (LogLevel or string)
        """
        self.logger.setLevel(LogLevel.parse(level))

    def _get_context(self) -> Dict[str, Any]:
        """Get current thread-local context, merged across nested blocks."""
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context: Dict[str, Any] = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    @staticmethod
    def _format_message(msg: str, context: Dict[str, Any]) -> str:
        """Append context to message as key=value pairs."""
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Example:
            >>> with logger.add_context(path="a.txt"):
            ...     logger.debug("Evaluating candidate")
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined_context = self._get_context()
        combined_context.update(context)
        self.logger.log(
            level,
            self._format_message(msg, combined_context),
            extra={"context": combined_context},
        )

    def debug(self, msg: str, **context) -> None:
        """Log debug message with context."""
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        """Log info message with context."""
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        """Log warning message with context."""
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        """Log error message with context."""
        self._log(LogLevel.ERROR, msg, context)


# Global logger instance
_global_logger: Optional[Logger] = None


def get_logger(name: str = "stest") -> Logger:
    """Get or create a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        _global_logger = Logger(name=name)
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance."""
    global _global_logger
    _global_logger = logger
