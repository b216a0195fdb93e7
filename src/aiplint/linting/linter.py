# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invocation of the external ``api-linter`` binary."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess
from typing import Protocol, runtime_checkable

from ..core.documents import TextDocument
from ..core.errors import LinterInvocationError
from ..core.runtime.process import (
    TIMEOUT_RETURNCODE,
    CommandOptions,
    SubprocessExecutionError,
    run_command,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_LINTER_BINARY = "api-linter"

RunnerCallable = Callable[..., CompletedProcess[str]]


@runtime_checkable
class Linter(Protocol):
    """Collaborator producing the raw report text for one document."""

    def lint(self, document: TextDocument) -> str:
        """Return the linter's standard output for ``document``.

        Raises:
            LinterInvocationError: If the linter cannot run or reports failure.
        """


@dataclass(slots=True)
class ApiLinter:
    """Run ``<binary> [extra args] <absolute path>`` and return its stdout."""

    binary: str = DEFAULT_LINTER_BINARY
    timeout: float | None = None
    extra_args: Sequence[str] = field(default_factory=tuple)
    cwd: Path | None = None
    runner: RunnerCallable = run_command

    def command_for(self, path: Path) -> list[str]:
        """Return the command line used to lint ``path``."""

        return [self.binary, *self.extra_args, str(path)]

    def lint(self, document: TextDocument) -> str:
        """Lint the file backing ``document``.

        Args:
            document: Open document; its URI is mapped to a file-system path.

        Returns:
            str: Raw report text written to standard output.

        Raises:
            LinterInvocationError: When the binary is missing, times out,
                exits with a non-zero status or cannot be launched.
        """

        try:
            path = document.path.resolve()
        except ValueError as exc:
            raise LinterInvocationError(str(exc)) from exc
        cmd = self.command_for(path)
        options = CommandOptions(cwd=self.cwd, check=True).with_timeout(self.timeout)
        LOGGER.debug("running %s", " ".join(cmd))
        try:
            completed = self.runner(cmd, options=options)
        except FileNotFoundError as exc:
            raise LinterInvocationError(str(exc), command=cmd) from exc
        except SubprocessExecutionError as exc:
            reason = (
                f"timed out after {self.timeout}s"
                if exc.returncode == TIMEOUT_RETURNCODE and self.timeout is not None
                else f"exited with status {exc.returncode}"
            )
            raise LinterInvocationError(
                f"{self.binary} {reason}",
                command=cmd,
                returncode=exc.returncode,
                stderr=exc.stderr,
            ) from exc
        except OSError as exc:
            raise LinterInvocationError(f"could not launch {self.binary}: {exc}", command=cmd) from exc
        return completed.stdout or ""


__all__ = ["ApiLinter", "DEFAULT_LINTER_BINARY", "Linter", "RunnerCallable"]
