# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels understood by diagnostic consumers."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"


_SEVERITY_TO_LSP_CODE: Final[dict[Severity, int]] = {
    Severity.ERROR: 1,
    Severity.WARNING: 2,
    Severity.INFORMATION: 3,
    Severity.HINT: 4,
}

FINDING_SEVERITY: Final[Severity] = Severity.WARNING


def severity_to_lsp(severity: Severity) -> int:
    """Map :class:`Severity` to the numeric code used by language servers.

    Args:
        severity: Severity value to translate.

    Returns:
        int: ``DiagnosticSeverity`` code (1 = error ... 4 = hint).
    """
    return _SEVERITY_TO_LSP_CODE.get(severity, _SEVERITY_TO_LSP_CODE[Severity.WARNING])


__all__ = ["FINDING_SEVERITY", "Severity", "severity_to_lsp"]
