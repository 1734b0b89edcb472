#!/usr/bin/env python3
"""Command-line interface for stest.

This module provides the CLI for filtering files by their properties:
- Argument parsing (test flags modelled on test(1))
- Configuration file loading and merging
- Logging setup
- Exit status mapping

Example:
    >>> from stest.cli import parse_arguments
    >>> args = parse_arguments(['-f', '-x', '/usr/bin/env'])
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from stest.core.config import ConfigError, ConfigManager, ConfigSource, default_config_path
from stest.core.constants import STEST_VERSION, ExitCode
from stest.core.logging import Logger, set_global_logger
from stest.rules.options import OptionsError, TestOptions

DESCRIPTION = (
    "Filter a list of files by properties, analogous to test(1). "
    "Files which pass all tests are printed to stdout."
)

# (short flag, long flag, dest, help)
TEST_FLAGS = (
    ("-a", "--allow-hidden", "hidden", "Test hidden files"),
    ("-b", "--block-special", "block_special", "Test that files are block specials"),
    ("-c", "--char-special", "char_special", "Test that files are character specials"),
    ("-d", "--directory", "directory", "Test that files are directories"),
    ("-f", "--regular", "regular", "Test that files are regular files"),
    ("-g", "--set-group-id", "set_gid", "Test that files have their set-group-ID flag set"),
    ("-h", "--symbolic-link", "symbolic_link", "Test that files are symbolic links"),
    ("-l", "--dir-contents", "dir_contents", "Test the contents of a directory given as an argument"),
    ("-p", "--fifo", "fifo", "Test that files are named pipes"),
    ("-q", "--quiet", "quiet", "No files are printed, only the exit status is returned"),
    ("-r", "--readable", "readable", "Test that files are readable"),
    ("-s", "--not-empty", "not_empty", "Test that files are not empty"),
    ("-u", "--set-user-id", "set_uid", "Test that files have their set-user-ID flag set"),
    ("-v", "--invert", "invert", "Invert the sense of tests, only failing files pass"),
    ("-w", "--writable", "writable", "Test that files are writable"),
    ("-x", "--executable", "executable", "Test that files are executable"),
)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    -h is a test flag here, so help is only reachable as --help.
    """
    parser = argparse.ArgumentParser(
        prog="stest",
        description=DESCRIPTION,
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List executables in a directory
  stest -fx -l /usr/bin

  # Files in the current directory changed since the last build
  stest -f -n build.stamp -l .

  # Succeed if any of the given paths is missing
  stest -q -v config.yaml data.db

Exit status is 0 if any file passed, 1 if none did, 2 on error.
        """,
    )

    tests = parser.add_argument_group("tests")
    for short, long, dest, help_text in TEST_FLAGS:
        tests.add_argument(short, long, dest=dest, action="store_true", help=help_text)

    age = tests.add_mutually_exclusive_group()
    age.add_argument(
        "-n",
        "--newer-than",
        metavar="FILE",
        dest="newer_than",
        help="Test that files are newer than FILE",
    )
    age.add_argument(
        "-o",
        "--older-than",
        metavar="FILE",
        dest="older_than",
        help="Test that files are older than FILE",
    )

    parser.add_argument("files", metavar="FILE", nargs="*", help="List of files")

    # Configuration and logging options
    misc = parser.add_argument_group("configuration options")

    misc.add_argument(
        "--config",
        metavar="FILE",
        type=str,
        help=f"Configuration file path (YAML format, default: {default_config_path()})",
    )
    misc.add_argument("--debug", action="store_true", help="Enable debug logging on stderr")
    misc.add_argument("--log-file", metavar="FILE", type=str, help="Also write logs to FILE")
    misc.add_argument("--help", action="help", help="Show this help message and exit")
    misc.add_argument("--version", action="version", version=f"%(prog)s {STEST_VERSION}")

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If validation fails
    """
    parsed = build_parser().parse_args(args)
    _validate_arguments(parsed)
    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Input files are not checked here: a missing file simply fails its tests.

    Raises:
        CLIError: If validation fails
    """
    if args.config:
        if not os.path.exists(args.config):
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not os.path.isfile(args.config):
            raise CLIError(f"Configuration path is not a file: {args.config}")


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build configuration dictionary from command-line arguments.

    Only values actually given on the command line are included.
    """
    config: Dict[str, Any] = {}

    logging_config: Dict[str, Any] = {}
    if args.debug:
        logging_config["level"] = "DEBUG"
    if args.log_file:
        logging_config["file"] = args.log_file
    if logging_config:
        config["logging"] = logging_config

    return config


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Assemble configuration from file, environment and arguments.

    Raises:
        ConfigError: If any source is invalid
    """
    config = ConfigManager()

    if args.config:
        config.load_file(args.config)
    elif default_config_path().is_file():
        config.load_file(str(default_config_path()))

    config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
    return config


def build_options(args: argparse.Namespace, config: ConfigManager) -> TestOptions:
    """
    Build test options from arguments, with config defaults underneath.

    Raises:
        OptionsError: If the options are inconsistent
    """
    values = {dest: getattr(args, dest) for _, _, dest, _ in TEST_FLAGS}
    values["newer_than"] = args.newer_than
    values["older_than"] = args.older_than
    values["files"] = args.files
    return TestOptions.from_mapping(values, config.option_defaults())


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on configuration.

    Returns:
        Configured logger instance, also installed as the global logger
    """
    logger = Logger("stest", level=config.get("logging.level", "WARNING"))

    log_file = config.get("logging.file")
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))

    set_global_logger(logger)
    return logger


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter can flush it on exit."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Handles argument parsing and configuration, then passes control to
    stest.main.run_stest for the actual filtering.

    Returns:
        Process exit status
    """
    try:
        args = parse_arguments(argv)
        config = load_configuration(args)
        logger = setup_logging(config)
        options = build_options(args, config)

        from stest.main import run_stest

        status = run_stest(options, logger)
        sys.stdout.flush()
        return status

    except (CLIError, ConfigError, OptionsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return ExitCode.INTERRUPTED

    except BrokenPipeError:
        # Raised while printing a passing name once the reader has gone
        _silence_stdout()
        return ExitCode.PASSED

    except OSError as e:
        # e.g. an unwritable --log-file
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
