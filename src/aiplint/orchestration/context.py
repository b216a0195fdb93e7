# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Explicit collaborators and policies handed to the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config.models import FailurePolicy, ValidationConfig
from ..config.settings import SettingsCache
from ..diagnostics.sinks import DiagnosticSink


@dataclass(frozen=True, slots=True)
class HostCapabilities:
    """Features the editor host advertised at start-up."""

    document_configuration: bool = False
    related_information: bool = True


@dataclass(frozen=True, slots=True)
class ValidationPolicy:
    """Tunable behaviour of validation passes."""

    validate_on_change: bool = False
    debounce_seconds: float = 0.0
    on_linter_failure: FailurePolicy = FailurePolicy.KEEP_STALE

    @classmethod
    def from_config(cls, config: ValidationConfig) -> ValidationPolicy:
        return cls(
            validate_on_change=config.validate_on_change,
            debounce_seconds=config.debounce_seconds,
            on_linter_failure=config.on_linter_failure,
        )


@dataclass(slots=True)
class ValidationContext:
    """Everything a validation pass needs besides the linter and enricher."""

    settings: SettingsCache
    sink: DiagnosticSink
    capabilities: HostCapabilities = field(default_factory=HostCapabilities)
    policy: ValidationPolicy = field(default_factory=ValidationPolicy)


__all__ = ["FailurePolicy", "HostCapabilities", "ValidationContext", "ValidationPolicy"]
