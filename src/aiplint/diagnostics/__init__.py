# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic synthesis and publishing."""

from __future__ import annotations

from .sinks import (
    ConsoleDiagnosticSink,
    DiagnosticSink,
    InMemoryDiagnosticSink,
    JsonDiagnosticSink,
    PublishEvent,
)
from .synthesizer import DEFAULT_SOURCE, rule_reference, synthesize, synthesize_all

__all__ = [
    "ConsoleDiagnosticSink",
    "DEFAULT_SOURCE",
    "DiagnosticSink",
    "InMemoryDiagnosticSink",
    "JsonDiagnosticSink",
    "PublishEvent",
    "rule_reference",
    "synthesize",
    "synthesize_all",
]
