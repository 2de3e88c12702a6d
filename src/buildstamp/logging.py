"""Logging configuration for buildstamp CLI."""

import logging
from enum import IntEnum
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "buildstamp"


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def resolve_level(verbosity: int = 0, quiet: bool = False, debug: bool = False) -> int:
    """Map CLI flags to a log level.

    Flag precedence: quiet > debug > verbosity.
    """
    if quiet:
        return LogLevel.QUIET
    if debug or verbosity >= 1:
        return LogLevel.VERBOSE
    return LogLevel.NORMAL


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
    debug: bool = False,
) -> Console:
    """Configure the buildstamp logger from CLI options.

    Logs always go to stderr so stdout carries only the version (or
    ``NAME=value`` exports) and can be captured by CI scripts.

    Args:
        verbosity: Number of -v flags (0=normal, 1=debug, 2+=debug with time/path)
        quiet: Only warnings and errors
        no_color: Disable colored output
        stream: Output stream for logs (stderr when None)
        debug: Same as -vv

    Returns:
        Configured Rich console for log output
    """
    level = resolve_level(verbosity, quiet, debug)
    detailed = debug or verbosity >= 2

    console = Console(
        file=stream,
        stderr=stream is None,
        force_terminal=not no_color,
        no_color=no_color,
    )
    handler = RichHandler(
        console=console,
        show_time=detailed,
        show_path=detailed,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False

    return console
