# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""External linter invocation."""

from __future__ import annotations

from .linter import DEFAULT_LINTER_BINARY, ApiLinter, Linter

__all__ = ["ApiLinter", "DEFAULT_LINTER_BINARY", "Linter"]
