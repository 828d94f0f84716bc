# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status lines printed by CLI commands through Rich consoles."""

from __future__ import annotations

import sys
from functools import cache
from typing import Final, Literal

from rich.console import Console
from rich.text import Text

StatusKind = Literal["ok", "fail"]

_STATUS_MARKS: Final[dict[StatusKind, tuple[str, str]]] = {
    "ok": ("✅ ", "green"),
    "fail": ("❌ ", "red"),
}


def stdout_is_terminal() -> bool:
    """Return whether stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def status_console(*, color: bool, emoji: bool, terminal: bool) -> Console:
    """Return the shared console used for status lines with these settings.

    Args:
        color: Whether ANSI colour may be emitted.
        emoji: Whether Rich renders ``:emoji:`` codes.
        terminal: Whether stdout is a terminal at the time of the call.

    Returns:
        Console: Console reused for every status line with the same settings.
    """

    colored = color and terminal
    return Console(
        color_system="auto" if colored else None,
        force_terminal=terminal,
        no_color=not colored,
        emoji=emoji,
        soft_wrap=True,
    )


def report(kind: StatusKind, message: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``message`` as a status line of ``kind``.

    Args:
        kind: ``"ok"`` for success lines, ``"fail"`` for failures.
        message: Text following the status mark.
        use_emoji: Whether the status mark is prefixed.
        use_color: Explicit colour choice; follows stdout when ``None``.
    """

    terminal = stdout_is_terminal()
    colored = terminal if use_color is None else use_color
    mark, style = _STATUS_MARKS[kind]
    text = Text(f"{mark if use_emoji else ''}{message}")
    if colored:
        text.stylize(style)
    status_console(color=colored, emoji=use_emoji, terminal=terminal).print(text)


def ok(message: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    report("ok", message, use_emoji=use_emoji, use_color=use_color)


def fail(message: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    report("fail", message, use_emoji=use_emoji, use_color=use_color)


__all__ = ["StatusKind", "fail", "ok", "report", "status_console", "stdout_is_terminal"]
