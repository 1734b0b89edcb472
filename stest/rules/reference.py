#!/usr/bin/env python3
"""Reference time capture for the newer-than / older-than tests.

The reference file is read exactly once per run, before any candidate is
evaluated, and the resulting timestamp is reused for every candidate.
"""

import os
from typing import Optional

from stest.core.constants import ErrorCode
from stest.rules.options import TestOptions


class ReferenceTimeError(OSError):
    """The reference file for an age test could not be read."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.NOT_FOUND):
        super().__init__(message)
        self.error_code = error_code


def resolve_reference_time(options: TestOptions) -> Optional[int]:
    """Resolve the modification time of the configured reference file.

    newer_than is used if set, otherwise older_than; with neither set
    nothing is read.

    Args:
        options: Test options for this run

    Returns:
        Modification time in nanoseconds, or None when no age test is enabled

    Raises:
        ReferenceTimeError: If the reference file cannot be stat'd
    """
    path = options.reference_path
    if path is None:
        return None

    try:
        return os.stat(path).st_mtime_ns
    except FileNotFoundError as e:
        raise ReferenceTimeError(f"Reference file not found: {path}") from e
    except PermissionError as e:
        raise ReferenceTimeError(
            f"Permission denied reading reference file: {path}", ErrorCode.PERMISSION_DENIED
        ) from e
    except (OSError, ValueError) as e:
        raise ReferenceTimeError(
            f"Cannot read reference file {path}: {e}", ErrorCode.INVALID_INPUT
        ) from e
