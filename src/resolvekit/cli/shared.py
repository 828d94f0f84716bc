# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from ..logging import fail as core_fail
from ..logging import ok as core_ok

PACKAGE_LOGGER = "resolvekit"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool
    debug_enabled: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    def fail(self, message: str) -> None:
        """Report a failed command step.

        Args:
            message: Failure description shown after the status mark.
        """

        core_fail(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Report a completed command step.

        Args:
            message: Success description shown after the status mark.
        """

        core_ok(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write plain command output to stdout.

        Args:
            message: Line printed verbatim through :func:`typer.echo`.
        """

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        Args:
            message: Debug payload; ``key=value`` pairs are highlighted.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated Rich console.

    With ``debug`` enabled the package logger is also routed to the console
    through a :class:`~rich.logging.RichHandler`.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to the console.
    """

    console = Console(no_color=no_color, highlight=False, stderr=True)
    if debug:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
            package_logger.addHandler(RichHandler(console=console, show_path=False))
        package_logger.setLevel(logging.DEBUG)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


__all__ = ["CLIError", "CLILogger", "build_cli_logger"]
