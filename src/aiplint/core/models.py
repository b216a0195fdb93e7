# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the aiplint package."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .positions import Range
from .severity import FINDING_SEVERITY, Severity, severity_to_lsp

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = "JsonScalar | list[JsonValue] | dict[str, JsonValue]"

DEFAULT_MAX_PROBLEMS = 1000


class Finding(BaseModel):
    """One issue reported by the linter against one file."""

    model_config = ConfigDict(frozen=True)

    message: str
    range: Range = Field(default_factory=Range.zero)
    rule_id: str = ""
    rule_doc_uri: str = ""
    suggestion: str | None = None

    def with_suggestion(self, suggestion: str | None) -> Finding:
        """Return a copy of the finding carrying ``suggestion``.

        Args:
            suggestion: Suggestion text, or ``None`` to clear it.

        Returns:
            Finding: New finding; the receiver is left untouched.
        """

        return self.model_copy(update={"suggestion": suggestion})


class FileReport(BaseModel):
    """All findings reported for one analysed file, in output order."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    findings: tuple[Finding, ...] = Field(default_factory=tuple)


class DocumentSettings(BaseModel):
    """Effective configuration for one open document."""

    model_config = ConfigDict(frozen=True)

    max_problems: int = Field(default=DEFAULT_MAX_PROBLEMS, ge=0)


class RelatedInformation(BaseModel):
    """Secondary message attached to a diagnostic at a document location."""

    model_config = ConfigDict(frozen=True)

    uri: str
    range: Range
    message: str

    def to_lsp(self) -> dict[str, JsonValue]:
        """Return the ``DiagnosticRelatedInformation`` JSON shape."""

        return {
            "location": {"uri": self.uri, "range": _range_to_lsp(self.range)},
            "message": self.message,
        }


class DiagnosticRecord(BaseModel):
    """Publishable diagnostic derived from a finding; never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    range: Range
    message: str
    severity: Severity = FINDING_SEVERITY
    source: str = "api-linter"
    code: str | None = None
    code_description: str | None = None
    related: tuple[RelatedInformation, ...] = Field(default_factory=tuple)

    def to_lsp(self) -> dict[str, JsonValue]:
        """Return the JSON shape used by ``textDocument/publishDiagnostics``.

        Returns:
            dict[str, JsonValue]: Diagnostic payload with LSP field names.
        """

        payload: dict[str, JsonValue] = {
            "range": _range_to_lsp(self.range),
            "severity": severity_to_lsp(self.severity),
            "source": self.source,
            "message": self.message,
        }
        if self.code is not None:
            payload["code"] = self.code
        if self.code_description is not None:
            payload["codeDescription"] = {"href": self.code_description}
        if self.related:
            payload["relatedInformation"] = [entry.to_lsp() for entry in self.related]
        return payload


def _range_to_lsp(span: Range) -> dict[str, JsonValue]:
    return {
        "start": {"line": span.start.line, "character": span.start.column},
        "end": {"line": span.end.line, "character": span.end.column},
    }


def iter_findings(reports: Iterable[FileReport]) -> Iterator[Finding]:
    """Yield every finding across ``reports`` preserving report and finding order."""

    for report in reports:
        yield from report.findings


__all__ = [
    "DEFAULT_MAX_PROBLEMS",
    "DiagnosticRecord",
    "DocumentSettings",
    "FileReport",
    "Finding",
    "JsonScalar",
    "JsonValue",
    "RelatedInformation",
    "iter_findings",
]
