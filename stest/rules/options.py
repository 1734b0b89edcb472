#!/usr/bin/env python3
"""Test options for a single stest run.

TestOptions is the validated, read-only configuration consumed by the
predicate engine. One boolean per test, the run modifiers, the optional
reference files for the age tests and the ordered list of input paths.

Example:
    >>> options = TestOptions(regular=True, files=("a.txt",))
    >>> options.enabled_tests()
    ('regular',)
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from stest.core.constants import OPTION_FLAGS, ErrorCode, FilePath

# Per-entry tests in evaluation order (hidden-name check is handled separately)
TEST_ORDER = (
    "block_special",
    "char_special",
    "directory",
    "regular",
    "set_gid",
    "symbolic_link",
    "newer_than",
    "older_than",
    "fifo",
    "readable",
    "not_empty",
    "set_uid",
    "writable",
    "executable",
)


class OptionsError(Exception):
    """Invalid combination of test options."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message)
        self.error_code = error_code


@dataclass(frozen=True)
class TestOptions:
    """Enabled tests, modifiers and inputs for one run."""

    __test__ = False  # not a pytest test class

    hidden: bool = False  # Allow names starting with "."
    block_special: bool = False
    char_special: bool = False
    directory: bool = False
    regular: bool = False
    set_gid: bool = False
    symbolic_link: bool = False
    dir_contents: bool = False  # Test children of each input directory
    newer_than: Optional[FilePath] = None
    older_than: Optional[FilePath] = None
    fifo: bool = False
    quiet: bool = False  # Only the outcome matters
    readable: bool = False
    not_empty: bool = False
    set_uid: bool = False
    invert: bool = False  # Only failing files pass
    writable: bool = False
    executable: bool = False
    files: Tuple[FilePath, ...] = ()

    def __post_init__(self):
        if self.newer_than is not None and self.older_than is not None:
            raise OptionsError("newer-than and older-than cannot be combined")

        # Normalize str, bytes and path-like inputs to plain strings
        object.__setattr__(self, "files", tuple(os.fsdecode(f) for f in self.files))
        for name in ("newer_than", "older_than"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, os.fsdecode(value))

    @property
    def reference_path(self) -> Optional[FilePath]:
        """The file whose modification time the age tests compare against."""
        if self.newer_than is not None:
            return self.newer_than
        return self.older_than

    def is_enabled(self, test: str) -> bool:
        """Check whether a named test from TEST_ORDER is switched on."""
        value = getattr(self, test)
        if test in ("newer_than", "older_than"):
            return value is not None
        return bool(value)

    def enabled_tests(self) -> Tuple[str, ...]:
        """Names of enabled tests in evaluation order."""
        return tuple(test for test in TEST_ORDER if self.is_enabled(test))

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, Any],
        defaults: Optional[Mapping[str, bool]] = None,
    ) -> "TestOptions":
        """Build options from a mapping, layering boolean defaults underneath.

        A default can only switch an option on; a true value in `values`
        always wins.

        Args:
            values: Option values (e.g. from parsed command-line arguments)
            defaults: Boolean defaults (e.g. the config `defaults` section)

        Raises:
            OptionsError: On unknown option names or invalid combinations
        """
        known = {f.name for f in fields(cls)}
        unknown = (set(values) | set(defaults or {})) - known
        if unknown:
            raise OptionsError(f"Unknown options: {', '.join(sorted(unknown))}")

        kwargs: Dict[str, Any] = {}
        for name in OPTION_FLAGS:
            kwargs[name] = bool(values.get(name)) or bool((defaults or {}).get(name))

        kwargs["newer_than"] = values.get("newer_than")
        kwargs["older_than"] = values.get("older_than")
        kwargs["files"] = tuple(values.get("files") or ())
        return cls(**kwargs)

