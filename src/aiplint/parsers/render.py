# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render findings back into the linter's report grammar."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import FileReport, Finding
from .base import SUGGESTION_PLACEHOLDER

_INDENT = "  "


def render_finding(finding: Finding, *, indent: int = 0) -> str:
    """Render one finding as a ``- message:`` problem item.

    A missing suggestion is written as the ``TODO`` placeholder so a reader
    (or a completion model) can see where a suggestion belongs.

    Args:
        finding: Finding to render.
        indent: Number of indentation levels applied to the item.

    Returns:
        str: Multi-line problem item without a trailing newline.
    """

    pad = _INDENT * indent
    inner = pad + _INDENT
    message_lines = finding.message.splitlines() or [""]
    lines = [f"{pad}- message: {message_lines[0]}".rstrip()]
    lines.extend(f"{inner}{line}" for line in message_lines[1:])
    lines.extend(
        [
            f"{inner}suggestion: {finding.suggestion or SUGGESTION_PLACEHOLDER}",
            f"{inner}location:",
            f"{inner}{_INDENT}start_position:",
            f"{inner}{_INDENT * 2}line_number: {finding.range.start.line}",
            f"{inner}{_INDENT * 2}column_number: {finding.range.start.column}",
            f"{inner}{_INDENT}end_position:",
            f"{inner}{_INDENT * 2}line_number: {finding.range.end.line}",
            f"{inner}{_INDENT * 2}column_number: {finding.range.end.column}",
            f"{inner}rule_id: {finding.rule_id}".rstrip(),
            f"{inner}rule_doc_uri: {finding.rule_doc_uri}".rstrip(),
        ]
    )
    return "\n".join(lines)


def render_report(report: FileReport) -> str:
    """Render a :class:`FileReport` in the grammar accepted by ``parse_report``."""

    lines = [f"- file_path: {report.file_path}", f"{_INDENT}problems:"]
    lines.extend(render_finding(finding, indent=2) for finding in report.findings)
    return "\n".join(lines)


def render_reports(reports: Iterable[FileReport]) -> str:
    """Render several reports separated by newlines."""

    return "\n".join(render_report(report) for report in reports)


__all__ = ["render_finding", "render_report", "render_reports"]
