#!/usr/bin/env python3
"""Predicate engine for filtering files by their properties.

This module evaluates the enabled tests against every candidate:
- Metadata lookup first; an unreadable entry fails the conjunction
- Hidden-name rejection unless hidden files are allowed
- Enabled tests in fixed order, stopping at the first failure
- Inversion of the whole conjunction
- Printing of passing names, and an OR over all verdicts

Example:
    >>> options = TestOptions(regular=True, files=("a.txt", "docs"))
    >>> run_tests(options)
    a.txt
    True
"""

import os
import stat
import sys
from typing import Callable, Dict, Iterable, Optional, TextIO, Tuple

from stest.core.constants import HIDDEN_PREFIX, ErrorCode, FileType
from stest.core.logging import Logger, get_logger
from stest.rules.candidates import Candidate, iter_candidates
from stest.rules.options import TestOptions
from stest.rules.reference import resolve_reference_time

Check = Callable[[Candidate, os.stat_result], bool]


class UnsupportedInputError(Exception):
    """No input paths were given and reading from stdin is not supported."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.UNSUPPORTED):
        super().__init__(message)
        self.error_code = error_code


def access(path: str, mode: int) -> bool:
    """Ask the OS whether the current process may access path.

    Uses the effective uid/gid where the platform supports it, so ACLs,
    ownership and mount options are all taken into account.
    """
    if os.access in os.supports_effective_ids:
        return os.access(path, mode, effective_ids=True)
    return os.access(path, mode)


def is_symlink(path: str) -> bool:
    """Check if path itself is a symbolic link, without following it."""
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except (OSError, ValueError):
        return False


def aggregate(verdicts: Iterable[bool]) -> bool:
    """OR together all verdicts.

    Every verdict is consumed, so printing happens for every passing entry.
    An empty sequence is False.
    """
    outcome = False
    for verdict in verdicts:
        outcome = outcome or verdict
    return outcome


class PredicateEngine:
    """Evaluates test options against candidates.

    The reference time for the age tests must be resolved before the
    engine is built; it is never re-read.
    """

    def __init__(
        self,
        options: TestOptions,
        reference_time: Optional[int] = None,
        output: Optional[TextIO] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize predicate engine.

        Args:
            options: Test options for this run
            reference_time: Reference mtime in nanoseconds (required for age tests)
            output: Stream for passing names (default: sys.stdout)
            logger: Logger for per-check diagnostics
        """
        if options.reference_path is not None and reference_time is None:
            raise ValueError("Age test enabled but no reference time was resolved")

        self.options = options
        self.reference_time = reference_time
        self.logger = logger or get_logger()
        self._output = output

        checks: Dict[str, Check] = {
            "block_special": self._file_type_check(FileType.BLOCK_DEVICE),
            "char_special": self._file_type_check(FileType.CHARACTER_DEVICE),
            "directory": self._file_type_check(FileType.DIRECTORY),
            "regular": self._file_type_check(FileType.REGULAR),
            "set_gid": lambda candidate, st: bool(st.st_mode & stat.S_ISGID),
            "symbolic_link": lambda candidate, st: is_symlink(candidate.path),
            "newer_than": lambda candidate, st: self.reference_time < st.st_mtime_ns,
            "older_than": lambda candidate, st: st.st_mtime_ns < self.reference_time,
            "fifo": self._file_type_check(FileType.FIFO),
            "readable": lambda candidate, st: access(candidate.path, os.R_OK),
            "not_empty": lambda candidate, st: st.st_size > 0,
            "set_uid": lambda candidate, st: bool(st.st_mode & stat.S_ISUID),
            "writable": lambda candidate, st: access(candidate.path, os.W_OK),
            "executable": lambda candidate, st: access(candidate.path, os.X_OK),
        }
        self._checks: Tuple[Tuple[str, Check], ...] = tuple(
            (name, checks[name]) for name in options.enabled_tests()
        )

    @staticmethod
    def _file_type_check(file_type: FileType) -> Check:
        return lambda candidate, st: FileType.from_mode(st.st_mode) is file_type

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def run(self) -> bool:
        """Evaluate every candidate and return the overall outcome.

        Returns:
            True if at least one candidate passed

        Raises:
            UnsupportedInputError: If no input paths were given
        """
        if not self.options.files:
            raise UnsupportedInputError("Reading files from stdin is not supported")

        candidates = iter_candidates(self.options, self.logger)
        return aggregate(self.evaluate(candidate) for candidate in candidates)

    def evaluate(self, candidate: Candidate) -> bool:
        """Evaluate one candidate, apply inversion and print it if it passes.

        Args:
            candidate: Entry to test

        Returns:
            The verdict after inversion
        """
        with self.logger.add_context(path=candidate.path):
            result = self._test(candidate)
            verdict = result != self.options.invert
            self.logger.debug("Evaluated candidate", result=result, verdict=verdict)

        if verdict and not self.options.quiet:
            self._emit(candidate.name)

        return verdict

    def _test(self, candidate: Candidate) -> bool:
        """The conjunction of all enabled tests, before inversion."""
        try:
            candidate.name.encode("utf-8")
        except UnicodeEncodeError:
            self.logger.debug("Name is not printable")
            return False

        try:
            st = os.stat(candidate.path)
        except (OSError, ValueError) as e:
            self.logger.debug("Metadata unavailable", reason=str(e))
            return False

        if not self.options.hidden and candidate.name.startswith(HIDDEN_PREFIX):
            self.logger.debug("Check failed", check="hidden")
            return False

        for name, check in self._checks:
            if not check(candidate, st):
                self.logger.debug("Check failed", check=name)
                return False

        return True

    def _emit(self, name: str) -> None:
        # Undecodable names only get here under inversion
        line = name.encode("utf-8", "backslashreplace").decode("utf-8")
        print(line, file=self.output)


def run_tests(
    options: TestOptions,
    output: Optional[TextIO] = None,
    logger: Optional[Logger] = None,
) -> bool:
    """Resolve the reference time, then evaluate all candidates.

    Args:
        options: Test options for this run
        output: Stream for passing names (default: sys.stdout)
        logger: Logger instance

    Returns:
        True if at least one candidate passed

    Raises:
        ReferenceTimeError: If the age-test reference file cannot be read
        UnsupportedInputError: If no input paths were given
    """
    reference_time = resolve_reference_time(options)
    engine = PredicateEngine(options, reference_time, output=output, logger=logger)
    return engine.run()
