# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assemble an orchestrator from :class:`AppConfig`."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from ..config.models import AppConfig, LinterConfig, SuggestionConfig
from ..config.settings import ConfigurationProvider, SettingsCache
from ..diagnostics.sinks import DiagnosticSink
from ..linting.linter import ApiLinter, Linter
from ..suggestions.enricher import SuggestionEnricher
from ..suggestions.service import ChatCompletionSuggestionService
from .context import HostCapabilities, ValidationContext, ValidationPolicy
from .orchestrator import ValidationOrchestrator


def build_linter(config: LinterConfig, *, cwd: Path | None = None) -> ApiLinter:
    return ApiLinter(
        binary=config.binary,
        timeout=config.timeout,
        extra_args=tuple(config.extra_args),
        cwd=cwd,
    )


def build_enricher(config: SuggestionConfig, *, environ: Mapping[str, str] | None = None) -> SuggestionEnricher:
    """Return an enricher; disabled unless ``config.enabled`` is set."""

    if not config.enabled:
        return SuggestionEnricher(max_workers=config.max_workers)
    service = ChatCompletionSuggestionService(
        endpoint=config.endpoint,
        model=config.model,
        temperature=config.temperature,
        api_key_env=config.api_key_env,
        timeout=config.timeout,
        environ=environ if environ is not None else os.environ,
    )
    return SuggestionEnricher(service, max_workers=config.max_workers)


def build_orchestrator(
    config: AppConfig,
    sink: DiagnosticSink,
    *,
    provider: ConfigurationProvider | None = None,
    linter: Linter | None = None,
    enricher: SuggestionEnricher | None = None,
    cwd: Path | None = None,
) -> ValidationOrchestrator:
    """Create a :class:`ValidationOrchestrator` configured by ``config``.

    Args:
        config: Effective application configuration.
        sink: Destination for published diagnostics.
        provider: Per-document settings source advertised by the host.
        linter: Override for the configured ``api-linter`` wrapper.
        enricher: Override for the configured suggestion enricher.
        cwd: Working directory for linter invocations.

    Returns:
        ValidationOrchestrator: Ready to validate documents.
    """

    context = ValidationContext(
        settings=SettingsCache(provider, config.defaults),
        sink=sink,
        capabilities=HostCapabilities(
            document_configuration=provider is not None,
            related_information=config.validation.related_information,
        ),
        policy=ValidationPolicy.from_config(config.validation),
    )
    return ValidationOrchestrator(
        context,
        linter or build_linter(config.linter, cwd=cwd),
        enricher or build_enricher(config.suggestions),
        max_workers=config.validation.max_workers,
    )


__all__ = ["build_enricher", "build_linter", "build_orchestrator"]
