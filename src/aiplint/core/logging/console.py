# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Colour and emoji preferences and the Rich consoles that honour them."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache

from rich.console import Console


def stdout_is_tty() -> bool:
    """Return ``True`` when stdout is a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def _console(color: bool, emoji: bool, tty: bool) -> Console:
    ansi = color and tty
    return Console(
        color_system="auto" if ansi else None,
        force_terminal=tty,
        no_color=not ansi,
        emoji=emoji,
        soft_wrap=True,
    )


@dataclass(frozen=True, slots=True)
class ConsolePreferences:
    """Presentation choices made once per invocation.

    ``color`` and ``emoji`` record what the user asked for; ANSI styling is
    still only emitted when stdout is a terminal.
    """

    color: bool = True
    emoji: bool = True

    @property
    def ansi(self) -> bool:
        return self.color and stdout_is_tty()

    def console(self) -> Console:
        """Return the shared console writing to the current ``sys.stdout``."""

        return _console(self.color, self.emoji, stdout_is_tty())


__all__ = ["ConsolePreferences", "stdout_is_tty"]
