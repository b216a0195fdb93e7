# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map findings onto publishable diagnostic records."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import DiagnosticRecord, Finding, RelatedInformation
from ..core.severity import FINDING_SEVERITY

DEFAULT_SOURCE = "api-linter"
RULE_SEPARATOR = " : "


def rule_reference(finding: Finding) -> str:
    """Return ``"<rule_id> : <rule_doc_uri>"`` for ``finding``."""

    return f"{finding.rule_id}{RULE_SEPARATOR}{finding.rule_doc_uri}"


def synthesize(
    finding: Finding,
    document_uri: str,
    *,
    related_information: bool = True,
    source: str = DEFAULT_SOURCE,
) -> DiagnosticRecord:
    """Build the diagnostic record published for ``finding``.

    Every finding is published at warning level. When the sink can display
    related information the record carries the suggestion (if any) followed
    by the rule reference, both addressed at the finding's own range.

    Args:
        finding: Parsed (and possibly enriched) finding.
        document_uri: URI of the document the finding belongs to.
        related_information: Whether the sink supports related information.
        source: Name reported as the diagnostic source.

    Returns:
        DiagnosticRecord: Immutable record ready for publishing.
    """

    related: list[RelatedInformation] = []
    if related_information:
        if finding.suggestion:
            related.append(RelatedInformation(uri=document_uri, range=finding.range, message=finding.suggestion))
        related.append(RelatedInformation(uri=document_uri, range=finding.range, message=rule_reference(finding)))
    return DiagnosticRecord(
        severity=FINDING_SEVERITY,
        range=finding.range,
        message=finding.message,
        source=source,
        code=finding.rule_id or None,
        code_description=finding.rule_doc_uri or None,
        related=tuple(related),
    )


def synthesize_all(
    findings: Iterable[Finding],
    document_uri: str,
    *,
    related_information: bool = True,
    source: str = DEFAULT_SOURCE,
) -> list[DiagnosticRecord]:
    """Synthesize ``findings`` preserving their order."""

    return [
        synthesize(finding, document_uri, related_information=related_information, source=source)
        for finding in findings
    ]


__all__ = ["DEFAULT_SOURCE", "rule_reference", "synthesize", "synthesize_all"]
