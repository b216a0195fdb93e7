# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validation orchestration for open documents."""

from __future__ import annotations

from .builder import build_enricher, build_linter, build_orchestrator
from .context import FailurePolicy, HostCapabilities, ValidationContext, ValidationPolicy
from .events import (
    ConfigurationChanged,
    DocumentChanged,
    DocumentClosed,
    DocumentOpened,
    DocumentSaved,
    ValidationEvent,
)
from .orchestrator import (
    ValidationOrchestrator,
    ValidationOutcome,
    ValidationState,
    ValidationStatus,
    select_reports,
)

__all__ = [
    "ConfigurationChanged",
    "DocumentChanged",
    "DocumentClosed",
    "DocumentOpened",
    "DocumentSaved",
    "FailurePolicy",
    "HostCapabilities",
    "ValidationContext",
    "ValidationEvent",
    "ValidationOrchestrator",
    "ValidationOutcome",
    "ValidationPolicy",
    "ValidationState",
    "ValidationStatus",
    "build_enricher",
    "build_linter",
    "build_orchestrator",
    "select_reports",
]
