# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers for running external processes."""

from __future__ import annotations

from .process import TIMEOUT_RETURNCODE, CommandOptions, SubprocessExecutionError, run_command

__all__ = ["CommandOptions", "SubprocessExecutionError", "TIMEOUT_RETURNCODE", "run_command"]
