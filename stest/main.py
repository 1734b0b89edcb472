#!/usr/bin/env python3
"""Main entry point for running stest.

This module handles:
- Running the predicate engine for a set of test options
- Mapping the overall outcome to an exit status
- Reporting fatal errors (unreadable reference file, no inputs)

Example:
    >>> from stest.main import run_stest
    >>> run_stest(TestOptions(regular=True, files=("a.txt",)), logger)
"""

import sys
from typing import Optional, TextIO

from stest.core.constants import ExitCode
from stest.core.logging import Logger, get_logger
from stest.rules.engine import UnsupportedInputError, run_tests
from stest.rules.options import TestOptions
from stest.rules.reference import ReferenceTimeError


class StestMain:
    """
    Runs one stest invocation and turns its outcome into an exit status.
    """

    def __init__(self, options: TestOptions, logger: Logger, output: Optional[TextIO] = None):
        """
        Initialize stest main controller.

        Args:
            options: Test options for this run
            logger: Logger instance
            output: Stream for passing names (default: sys.stdout)
        """
        self.options = options
        self.logger = logger
        self.output = output

    def run(self) -> int:
        """
        Run the filter.

        Returns:
            ExitCode.PASSED if any file passed, ExitCode.FAILED if none did,
            ExitCode.ERROR on a fatal error
        """
        self.logger.debug(
            "Starting run",
            tests=",".join(self.options.enabled_tests()) or "none",
            files=len(self.options.files),
            invert=self.options.invert,
            dir_contents=self.options.dir_contents,
        )

        try:
            outcome = run_tests(self.options, output=self.output, logger=self.logger)

        except (ReferenceTimeError, UnsupportedInputError) as e:
            self.logger.error(f"Fatal error: {e}", error_code=e.error_code.name)
            return ExitCode.ERROR

        self.logger.debug("Run complete", outcome=outcome)
        return ExitCode.PASSED if outcome else ExitCode.FAILED


def run_stest(options: TestOptions, logger: Optional[Logger] = None, output: Optional[TextIO] = None) -> int:
    """
    Main entry point for running stest.

    Args:
        options: Test options for this run
        logger: Logger instance
        output: Stream for passing names (default: sys.stdout)

    Returns:
        Exit status
    """
    return StestMain(options, logger or get_logger(), output).run()


def main():
    """
    Entry point when run as standalone script.

    Typically called via cli.py, but can be run directly for testing.
    """
    from stest.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
