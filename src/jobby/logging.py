"""Logging configuration for jobby CLI."""

import logging
import sys
from enum import IntEnum
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO = sys.stderr,
    debug: bool = False,
) -> Console:
    """Configure the jobby logger from CLI options.

    Only the ``jobby`` logger tree is configured; job runners embedding
    jobby keep control of the root logger.

    Args:
        verbosity: Number of -v flags (0=normal, 1+=debug)
        quiet: Only warnings and errors (takes precedence over verbosity)
        no_color: Disable colored output
        stream: Output stream for logs
        debug: Enable debug logging with times and source paths (ignored if quiet)

    Returns:
        Console writing to stream

    Note:
        Flag precedence: quiet > debug > verbosity
    """
    if quiet:
        level = LogLevel.QUIET
    elif debug or verbosity >= 1:
        level = LogLevel.VERBOSE
    else:
        level = LogLevel.NORMAL

    detailed = not quiet and (debug or verbosity >= 2)
    console = Console(
        file=stream,
        force_terminal=not no_color,
        no_color=no_color,
    )
    handler = RichHandler(
        console=console,
        show_time=detailed,
        show_path=detailed,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("jobby")
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False
    return console
