"""Styled terminal output for the CLI.

Warnings and errors go to stderr so that stdout stays clean for piping;
everything else goes to stdout.

Usage:
    from gtfsrt_validator.output import detail, error, info, success, warn

    info("Validating vehicle_updates.pb (42 entities, 13 rules)")
    error("E002: stop_time_updates not strictly sorted by stop_sequence (1)")
    detail("  entity 17: trip_id 1234 has stop_sequence 3 after stop_sequence 5")
    success("No violations found")
"""

from __future__ import annotations

import sys
from typing import NamedTuple, TextIO

import click

from gtfsrt_validator.validation import Severity


class _Style(NamedTuple):
    prefix: str
    color: str
    stderr: bool


_STYLES = {
    "success": _Style("\u2713", "green", stderr=False),  # checkmark
    "info": _Style("\u2192", "blue", stderr=False),  # arrow
    "warn": _Style("\u26a0", "yellow", stderr=True),  # warning sign
    "error": _Style("\u2717", "red", stderr=True),  # ballot X
    "detail": _Style(" ", "bright_black", stderr=False),  # indent only
}


def _output(message: str, style: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    look = _STYLES[style]
    if file is None and look.stderr:
        file = sys.stderr
    click.echo(
        f"{click.style(look.prefix, fg=look.color)} {click.style(message, fg=look.color)}",
        file=file,
        nl=nl,
    )


def success(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a message with a green checkmark.

    Args:
        message: Text to print after the prefix.
        file: Stream to write to (default: stdout).
        nl: Whether to end the line.

    Example:
        >>> success("No violations found")
    """
    _output(message, "success", file=file, nl=nl)


def info(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a message with a blue arrow.

    Args:
        message: Text to print after the prefix.
        file: Stream to write to (default: stdout).
        nl: Whether to end the line.

    Example:
        >>> info("Validating vehicle_updates.pb (42 entities, 13 rules)")
    """
    _output(message, "info", file=file, nl=nl)


def warn(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a message with a yellow warning sign.

    Args:
        message: Text to print after the prefix.
        file: Stream to write to (default: stderr).
        nl: Whether to end the line.

    Example:
        >>> warn("W009: schedule_relationship not populated (3)")
    """
    _output(message, "warn", file=file, nl=nl)


def error(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a message with a red X.

    Args:
        message: Text to print after the prefix.
        file: Stream to write to (default: stderr).
        nl: Whether to end the line.

    Example:
        >>> error("E038: invalid header gtfs_realtime_version (1)")
    """
    _output(message, "error", file=file, nl=nl)


def detail(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a dimmed, indented message under a rule line."""
    _output(message, "detail", file=file, nl=nl)


def severity(level: Severity, message: str, *, file: TextIO | None = None) -> None:
    """Print a rule line styled by the rule's severity.

    ERROR rules use the error() style and WARNING rules the warn() style,
    both on stderr unless file is given.
    """
    _output(message, "error" if level is Severity.ERROR else "warn", file=file)
