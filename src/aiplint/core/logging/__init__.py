# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared console logging helpers."""

from __future__ import annotations

from .console import ConsolePreferences, stdout_is_tty
from .public import emoji, fail, info, ok, section, warn

__all__ = [
    "ConsolePreferences",
    "emoji",
    "fail",
    "info",
    "ok",
    "section",
    "stdout_is_tty",
    "warn",
]
