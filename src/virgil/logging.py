"""Logging configuration for virgil CLI."""

import logging
from enum import IntEnum

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def resolve_log_level(verbosity: int = 0, quiet: bool = False, debug: bool = False) -> int:
    """Pick the root log level from CLI flags.

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
    debug: bool = False,
) -> Console:
    """Route log records through Rich on stderr.

    Args:
        verbosity: Number of -v flags (0=normal, 1+=debug)
        quiet: Only show warnings and errors
        no_color: Disable colored output
        debug: Enable debug logging with timestamps and source paths

    Returns:
        Rich console (stderr) shared by log records and CLI messages
    """
    console = Console(
        stderr=True,
        force_terminal=False if no_color else None,
        no_color=no_color,
    )
    detailed = debug or verbosity >= 2
    handler = RichHandler(console=console, show_time=detailed, show_path=detailed)

    logging.basicConfig(
        level=resolve_log_level(verbosity, quiet, debug),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    return console
