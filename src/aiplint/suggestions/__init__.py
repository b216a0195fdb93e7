# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Suggestion service contract and the enricher that drives it."""

from __future__ import annotations

from .enricher import EnrichmentResult, SuggestionEnricher
from .service import (
    ChatCompletionSuggestionService,
    NullSuggestionService,
    SuggestionRequest,
    SuggestionService,
    build_prompt,
)

__all__ = [
    "ChatCompletionSuggestionService",
    "EnrichmentResult",
    "NullSuggestionService",
    "SuggestionEnricher",
    "SuggestionRequest",
    "SuggestionService",
    "build_prompt",
]
