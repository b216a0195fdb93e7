# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-document validation passes with last-trigger-wins publishing."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from threading import Lock
from types import TracebackType

from ..config.models import FailurePolicy
from ..core.documents import DocumentStore, TextDocument
from ..core.errors import LinterInvocationError
from ..core.models import DiagnosticRecord, FileReport, iter_findings
from ..diagnostics.synthesizer import synthesize_all
from ..linting.linter import Linter
from ..parsers.report import parse_report
from ..suggestions.enricher import SuggestionEnricher
from .context import ValidationContext
from .events import (
    ConfigurationChanged,
    DocumentChanged,
    DocumentClosed,
    DocumentOpened,
    DocumentSaved,
    ValidationEvent,
)

LOGGER = logging.getLogger(__name__)


class ValidationState(str, Enum):
    """Stage a document's current validation pass has reached."""

    IDLE = "idle"
    LINTING = "linting"
    PARSING = "parsing"
    ENRICHING = "enriching"
    PUBLISHING = "publishing"


class ValidationStatus(str, Enum):
    """How a validation pass ended."""

    PUBLISHED = "published"
    SUPERSEDED = "superseded"
    LINTER_FAILED = "linter-failed"
    CLEARED = "cleared"


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of one call to :meth:`ValidationOrchestrator.validate`."""

    uri: str
    status: ValidationStatus
    diagnostics: tuple[DiagnosticRecord, ...] = ()
    error: LinterInvocationError | None = None

    @property
    def published(self) -> bool:
        return self.status in {ValidationStatus.PUBLISHED, ValidationStatus.CLEARED}


def _report_matches(report: FileReport, document_path: Path) -> bool:
    candidate = Path(report.file_path)
    if candidate.is_absolute():
        return candidate == document_path
    parts = candidate.parts
    return bool(parts) and document_path.parts[-len(parts) :] == parts


def select_reports(reports: Sequence[FileReport], document: TextDocument) -> list[FileReport]:
    """Return the reports describing ``document``.

    Reports are matched by path. When the document path cannot be derived or
    no report matches it, every report is kept.
    """

    try:
        document_path = document.path
    except ValueError:
        return list(reports)
    matching = [report for report in reports if _report_matches(report, document_path)]
    return matching or list(reports)


class ValidationOrchestrator:
    """Run lint, parse, enrich, synthesize and publish for open documents.

    Every pass takes a generation token for its document. A newer pass for
    the same document supersedes older ones; a superseded pass never
    publishes. The token check and the publish happen under one lock, so the
    last trigger for a document always owns the published set.
    """

    def __init__(
        self,
        context: ValidationContext,
        linter: Linter,
        enricher: SuggestionEnricher | None = None,
        *,
        max_workers: int = 4,
        documents: DocumentStore | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Wire the orchestrator to its collaborators.

        Args:
            context: Settings cache, sink, host capabilities and policy.
            linter: Collaborator producing raw linter output for a document.
            enricher: Suggestion enricher; a disabled one is used when omitted.
            max_workers: Size of the pool running triggered passes.
            documents: Store of open documents shared with the host.
            sleep: Function used for the debounce delay.
        """

        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._context = context
        self._linter = linter
        self._enricher = enricher or SuggestionEnricher()
        self._documents = documents or DocumentStore()
        self._sleep = sleep
        self._lock = Lock()
        self._generations: dict[str, int] = {}
        self._states: dict[str, ValidationState] = {}
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="aiplint-validate")

    @property
    def context(self) -> ValidationContext:
        return self._context

    @property
    def documents(self) -> DocumentStore:
        return self._documents

    def state_of(self, uri: str) -> ValidationState:
        """Return the stage reached by the current pass for ``uri``."""

        with self._lock:
            return self._states.get(uri, ValidationState.IDLE)

    def _begin(self, uri: str) -> int:
        with self._lock:
            token = self._generations.get(uri, 0) + 1
            self._generations[uri] = token
            self._states.pop(uri, None)
            return token

    def _is_current(self, uri: str, token: int) -> bool:
        with self._lock:
            return self._generations.get(uri) == token

    def _advance(self, uri: str, token: int, state: ValidationState) -> bool:
        with self._lock:
            if self._generations.get(uri) != token:
                return False
            self._states[uri] = state
            return True

    def _finish(self, uri: str, token: int) -> None:
        with self._lock:
            if self._generations.get(uri) == token:
                self._states.pop(uri, None)

    def _publish(self, uri: str, token: int, diagnostics: tuple[DiagnosticRecord, ...]) -> bool:
        with self._lock:
            if self._generations.get(uri) != token:
                return False
            self._states[uri] = ValidationState.PUBLISHING
            try:
                self._context.sink.publish(uri, diagnostics)
            finally:
                self._states.pop(uri, None)
            return True

    def _superseded(self, uri: str) -> ValidationOutcome:
        LOGGER.debug("validation of %s superseded by a newer pass", uri)
        return ValidationOutcome(uri=uri, status=ValidationStatus.SUPERSEDED)

    def supersede(self, uri: str) -> None:
        """Invalidate any in-flight pass for ``uri`` without starting a new one."""

        with self._lock:
            self._generations[uri] = self._generations.get(uri, 0) + 1
            self._states.pop(uri, None)

    def validate(self, document: TextDocument) -> ValidationOutcome:
        """Run one validation pass for ``document`` in the calling thread.

        Args:
            document: Snapshot of the document to validate.

        Returns:
            ValidationOutcome: How the pass ended and what it published.

        Raises:
            Exception: Errors other than linter failures propagate after the
                document's state is reset to idle.
        """

        uri = document.uri
        token = self._begin(uri)
        try:
            return self._run(document, uri, token)
        finally:
            self._finish(uri, token)

    def _run(self, document: TextDocument, uri: str, token: int) -> ValidationOutcome:
        delay = self._context.policy.debounce_seconds
        if delay > 0:
            self._sleep(delay)
            if not self._is_current(uri, token):
                return self._superseded(uri)
        settings = self._context.settings.get_settings(uri)

        if not self._advance(uri, token, ValidationState.LINTING):
            return self._superseded(uri)
        try:
            raw_output = self._linter.lint(document)
        except LinterInvocationError as exc:
            return self._linter_failed(uri, token, exc)

        if not self._advance(uri, token, ValidationState.PARSING):
            return self._superseded(uri)
        findings = list(iter_findings(select_reports(parse_report(raw_output), document)))

        if not self._advance(uri, token, ValidationState.ENRICHING):
            return self._superseded(uri)
        enrichment = self._enricher.enrich(
            findings,
            document.text,
            limit=settings.max_problems,
            cancelled=lambda: not self._is_current(uri, token),
        )

        diagnostics = tuple(
            synthesize_all(
                enrichment.findings,
                uri,
                related_information=self._context.capabilities.related_information,
            )
        )
        if not self._publish(uri, token, diagnostics):
            return self._superseded(uri)
        LOGGER.debug("published %d diagnostics for %s", len(diagnostics), uri)
        return ValidationOutcome(uri=uri, status=ValidationStatus.PUBLISHED, diagnostics=diagnostics)

    def _linter_failed(self, uri: str, token: int, error: LinterInvocationError) -> ValidationOutcome:
        LOGGER.warning("api-linter failed for %s: %s", uri, error)
        if self._context.policy.on_linter_failure is FailurePolicy.CLEAR:
            if not self._publish(uri, token, ()):
                return self._superseded(uri)
            return ValidationOutcome(uri=uri, status=ValidationStatus.CLEARED, error=error)
        self._finish(uri, token)
        if not self._is_current(uri, token):
            return self._superseded(uri)
        return ValidationOutcome(uri=uri, status=ValidationStatus.LINTER_FAILED, error=error)

    def trigger(self, document: TextDocument) -> Future[ValidationOutcome]:
        """Schedule a pass for ``document`` on the worker pool."""

        return self._executor.submit(self.validate, document)

    def revalidate_all(self) -> list[Future[ValidationOutcome]]:
        """Schedule a pass for every open document."""

        return [self.trigger(document) for document in self._documents.all()]

    def handle(self, event: ValidationEvent) -> list[Future[ValidationOutcome]]:
        """Apply a host notification and schedule the passes it implies.

        Args:
            event: Notification received from the host.

        Returns:
            list[Future[ValidationOutcome]]: Passes scheduled for the event.
        """

        match event:
            case DocumentOpened(document=document):
                self._documents.open(document)
                return [self.trigger(document)]
            case DocumentChanged(document=document):
                self._documents.update(document)
                if self._context.policy.validate_on_change:
                    return [self.trigger(document)]
                return []
            case DocumentSaved(document=document):
                self._documents.update(document)
                return [self.trigger(document)]
            case DocumentClosed(uri=uri):
                self.supersede(uri)
                self._documents.close(uri)
                self._context.settings.remove(uri)
                return []
            case ConfigurationChanged(settings=settings):
                if self._context.capabilities.document_configuration:
                    self._context.settings.invalidate_all()
                elif settings is not None:
                    self._context.settings.update_global(settings)
                return self.revalidate_all()
        raise TypeError(f"Unsupported validation event: {event!r}")

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def __enter__(self) -> ValidationOrchestrator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown(wait=True)


__all__ = [
    "ValidationOrchestrator",
    "ValidationOutcome",
    "ValidationState",
    "ValidationStatus",
    "select_reports",
]
