#!/usr/bin/env python3
"""Candidate enumeration.

Turns the input list into the sequence of entries to test: the inputs
themselves, or in directory-contents mode the direct children of each
input directory. Directories that cannot be listed contribute nothing.
"""

import os
from dataclasses import dataclass
from typing import Iterator, Optional

from stest.core.constants import DisplayName, FilePath
from stest.core.logging import Logger, get_logger
from stest.rules.options import TestOptions


@dataclass(frozen=True)
class Candidate:
    """A path to test and the name printed when it passes."""

    path: FilePath
    name: DisplayName

    @classmethod
    def from_path(cls, path: FilePath) -> "Candidate":
        return cls(path=path, name=display_name(path))


def display_name(path: FilePath) -> DisplayName:
    """Final component of path, or the whole path when there is none.

    >>> display_name("/tmp/d/a.txt")
    'a.txt'
    >>> display_name("/tmp/d/")
    '/tmp/d/'
    """
    return os.path.basename(path) or path


def iter_candidates(options: TestOptions, logger: Optional[Logger] = None) -> Iterator[Candidate]:
    """Yield candidates for the configured inputs, in input order.

    Args:
        options: Test options for this run
        logger: Logger for skipped directories

    Yields:
        One Candidate per entry to evaluate
    """
    logger = logger or get_logger()

    for path in options.files:
        if options.dir_contents:
            yield from iter_directory(path, logger)
        else:
            yield Candidate.from_path(path)


def iter_directory(path: FilePath, logger: Optional[Logger] = None) -> Iterator[Candidate]:
    """Yield the direct children of a directory in OS listing order.

    No recursion. A path that cannot be opened as a directory yields
    nothing; a listing error part way through ends the listing.
    """
    logger = logger or get_logger()

    try:
        entries = os.scandir(path)
    except (OSError, ValueError) as e:
        logger.debug("Skipping directory", path=path, reason=str(e))
        return

    with entries:
        while True:
            try:
                entry = next(entries)
            except StopIteration:
                return
            except OSError as e:
                logger.debug("Directory listing ended early", path=path, reason=str(e))
                return
            yield Candidate(path=entry.path, name=entry.name)
