# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsing and rendering of the linter's text report."""

from __future__ import annotations

from .base import SUGGESTION_PLACEHOLDER, Marker, Token, tokenize_line
from .render import render_finding, render_report, render_reports
from .report import ReportScanner, ScanState, parse_report

__all__ = [
    "Marker",
    "ReportScanner",
    "SUGGESTION_PLACEHOLDER",
    "ScanState",
    "Token",
    "parse_report",
    "render_finding",
    "render_report",
    "render_reports",
    "tokenize_line",
]
