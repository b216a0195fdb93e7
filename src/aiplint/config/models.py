# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the aiplint validation pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.models import DocumentSettings
from ..linting.linter import DEFAULT_LINTER_BINARY
from ..suggestions.service import DEFAULT_API_KEY_ENV, DEFAULT_ENDPOINT, DEFAULT_MODEL


class FailurePolicy(str, Enum):
    """What a failed linter run does to the previously published diagnostics."""

    KEEP_STALE = "keep-stale"
    CLEAR = "clear"


class LinterConfig(BaseModel):
    """How the external linter is invoked."""

    model_config = ConfigDict(validate_assignment=True)

    binary: str = DEFAULT_LINTER_BINARY
    timeout: float | None = Field(default=30.0, ge=0)
    extra_args: list[str] = Field(default_factory=list)


class SuggestionConfig(BaseModel):
    """Remote suggestion service settings."""

    model_config = ConfigDict(validate_assignment=True)

    enabled: bool = False
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    temperature: float = Field(default=0.7, ge=0, le=2)
    api_key_env: str = DEFAULT_API_KEY_ENV
    timeout: float | None = Field(default=30.0, ge=0)
    max_workers: int = Field(default=4, ge=1)


class ValidationConfig(BaseModel):
    """Behaviour of the per-document validation orchestrator."""

    model_config = ConfigDict(validate_assignment=True)

    validate_on_change: bool = False
    debounce_seconds: float = Field(default=0.0, ge=0)
    on_linter_failure: FailurePolicy = FailurePolicy.KEEP_STALE
    related_information: bool = True
    max_workers: int = Field(default=4, ge=1)


class AppConfig(BaseModel):
    """Top-level configuration assembled from defaults and TOML sources."""

    model_config = ConfigDict(validate_assignment=True)

    linter: LinterConfig = Field(default_factory=LinterConfig)
    suggestions: SuggestionConfig = Field(default_factory=SuggestionConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    defaults: DocumentSettings = Field(default_factory=DocumentSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as plain JSON-compatible data."""

        return self.model_dump(mode="json")


__all__ = [
    "AppConfig",
    "FailurePolicy",
    "LinterConfig",
    "SuggestionConfig",
    "ValidationConfig",
]
