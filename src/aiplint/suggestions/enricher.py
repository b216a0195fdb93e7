# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Attach remotely generated fix suggestions to findings."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field

from ..core.errors import SuggestionServiceError
from ..core.models import Finding
from ..core.positions import extract_range_text
from .service import NullSuggestionService, SuggestionRequest, SuggestionService

LOGGER = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]


def _never_cancelled() -> bool:
    return False


@dataclass(slots=True)
class EnrichmentResult:
    """Enriched findings plus bookkeeping about the requests issued."""

    findings: list[Finding]
    requested: int = 0
    failed: int = 0
    errors: list[SuggestionServiceError] = field(default_factory=list)

    def record_failure(self, error: SuggestionServiceError) -> None:
        self.requested += 1
        self.failed += 1
        self.errors.append(error)


class SuggestionEnricher:
    """Request suggestions for up to ``limit`` findings concurrently."""

    def __init__(self, service: SuggestionService | None = None, *, max_workers: int = 4) -> None:
        """Create an enricher backed by ``service``.

        Args:
            service: Suggestion collaborator; ``None`` disables enrichment.
            max_workers: Upper bound on concurrent suggestion requests.
        """

        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._service: SuggestionService = service or NullSuggestionService()
        self._enabled = service is not None
        self._max_workers = max_workers

    @property
    def enabled(self) -> bool:
        """Return ``True`` when a real suggestion service is configured."""

        return self._enabled

    def enrich(
        self,
        findings: Sequence[Finding],
        document_text: str,
        *,
        limit: int,
        cancelled: CancelCheck | None = None,
    ) -> EnrichmentResult:
        """Return ``findings`` with suggestions filled in where possible.

        Only the first ``limit`` findings are sent to the service; the rest
        pass through untouched. A failed request, whatever the error, leaves
        that finding without a suggestion and never aborts the others. Once ``cancelled`` returns
        ``True`` no further requests are issued.

        Args:
            findings: Findings in publish order.
            document_text: Full text of the document that produced them.
            limit: Maximum number of findings sent to the service.
            cancelled: Optional callable polled before each request.

        Returns:
            EnrichmentResult: Findings in input order, one per input finding.
        """

        enriched = list(findings)
        budget = min(max(limit, 0), len(enriched)) if self._enabled else 0
        if budget == 0:
            return EnrichmentResult(findings=enriched)
        is_cancelled = cancelled or _never_cancelled
        result = EnrichmentResult(findings=enriched)
        with ThreadPoolExecutor(max_workers=min(self._max_workers, budget)) as executor:
            futures: dict[int, Future[str | None]] = {
                index: executor.submit(self._request, enriched[index], document_text, is_cancelled)
                for index in range(budget)
            }
            for index, future in futures.items():
                label = enriched[index].rule_id or "finding"
                try:
                    suggestion = future.result()
                except SuggestionServiceError as exc:
                    LOGGER.warning("suggestion for %s omitted: %s", label, exc)
                    result.record_failure(exc)
                    continue
                except Exception as exc:
                    LOGGER.warning("suggestion for %s omitted after unexpected error", label, exc_info=exc)
                    error = SuggestionServiceError(f"unexpected suggestion failure: {exc!r}")
                    error.__cause__ = exc
                    result.record_failure(error)
                    continue
                if suggestion is None:
                    continue
                result.requested += 1
                enriched[index] = enriched[index].with_suggestion(suggestion)
        return result

    def _request(self, finding: Finding, document_text: str, cancelled: CancelCheck) -> str | None:
        if cancelled():
            return None
        request = SuggestionRequest(
            document_text=document_text,
            finding_range_text=extract_range_text(document_text, finding.range),
            finding=finding,
        )
        return self._service.suggest(request)


__all__ = ["CancelCheck", "EnrichmentResult", "SuggestionEnricher"]
