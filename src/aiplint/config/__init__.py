# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models, file loading, and the per-document settings cache."""

from __future__ import annotations

from .loader import CONFIG_FILENAME, PYPROJECT_FILENAME, load_config
from .models import AppConfig, FailurePolicy, LinterConfig, SuggestionConfig, ValidationConfig
from .settings import ConfigurationProvider, SettingsCache

__all__ = [
    "AppConfig",
    "CONFIG_FILENAME",
    "ConfigurationProvider",
    "FailurePolicy",
    "LinterConfig",
    "PYPROJECT_FILENAME",
    "SettingsCache",
    "SuggestionConfig",
    "ValidationConfig",
    "load_config",
]
