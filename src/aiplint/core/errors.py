# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error taxonomy for the validation pipeline.

No error defined here is fatal to the process. Each one is contained within a
single validation pass:

* :class:`LinterInvocationError` suppresses the publish of the current pass.
* :class:`ParseAnomaly` never leaves the parser; it is resolved to defaults.
* :class:`SuggestionServiceError` omits one finding's suggestion.
* :class:`ConfigurationUnavailable` falls back to process-wide defaults.
"""

from __future__ import annotations

from collections.abc import Sequence


class AiplintError(RuntimeError):
    """Base class for every error raised by aiplint."""


class ConfigError(AiplintError):
    """Raised when configuration input is invalid."""


class LinterInvocationError(AiplintError):
    """Raised when the external linter is missing, times out or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        """Initialise the error with the failing invocation metadata.

        Args:
            message: Human readable description of the failure.
            command: Command sequence that was executed, when known.
            returncode: Exit status reported by the process, when it ran.
            stderr: Captured standard error stream, when available.
        """

        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class ParseAnomaly(AiplintError):
    """Raised inside the parser when a finding block is malformed."""


class SuggestionServiceError(AiplintError):
    """Raised when a remote suggestion cannot be obtained."""


class ConfigurationUnavailable(AiplintError):
    """Raised when per-document configuration cannot be retrieved from the host."""


__all__ = [
    "AiplintError",
    "ConfigError",
    "ConfigurationUnavailable",
    "LinterInvocationError",
    "ParseAnomaly",
    "SuggestionServiceError",
]
