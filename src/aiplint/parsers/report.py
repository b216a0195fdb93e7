# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser turning the linter's YAML-like text report into :class:`FileReport` values.

The report is scanned once, line by line, by a small state machine::

    EXPECT_FILE_HEADER -> EXPECT_PROBLEM -> IN_MESSAGE [-> IN_SUGGESTION]
        -> IN_LOCATION -> AFTER_LOCATION -> EXPECT_PROBLEM ...

Every ``- message:`` item opens exactly one :class:`Finding` and every
``- file_path:`` header opens exactly one :class:`FileReport`, so the number
of findings always matches the number of problem items in each file section.
Malformed location blocks never abort the scan; the affected finding falls
back to the zero range.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from ..core.errors import ParseAnomaly
from ..core.models import FileReport, Finding
from ..core.positions import Range
from .base import (
    POSITION_MARKERS,
    Marker,
    Token,
    coerce_coordinate,
    is_block_indicator,
    iter_tokens,
    normalize_suggestion,
)

LOGGER = logging.getLogger(__name__)

_LOCATION_LAYOUT = (
    Marker.START_POSITION,
    Marker.LINE_NUMBER,
    Marker.COLUMN_NUMBER,
    Marker.END_POSITION,
    Marker.LINE_NUMBER,
    Marker.COLUMN_NUMBER,
)


class ScanState(str, Enum):
    """States of the report scanner."""

    EXPECT_FILE_HEADER = "expect-file-header"
    EXPECT_PROBLEM = "expect-problem"
    IN_MESSAGE = "in-message"
    IN_SUGGESTION = "in-suggestion"
    IN_LOCATION = "in-location"
    AFTER_LOCATION = "after-location"


@dataclass(slots=True)
class _FindingDraft:
    """Accumulates the fields of one problem item until the next item starts."""

    line: int
    message_lines: list[str] = field(default_factory=list)
    suggestion_lines: list[str] = field(default_factory=list)
    location: list[Token] | None = None
    rule_id: str = ""
    rule_doc_uri: str = ""

    def build(self) -> Finding:
        """Materialise the draft as an immutable :class:`Finding`."""

        try:
            span = _build_range(self.location)
        except ParseAnomaly as exc:
            LOGGER.debug("problem at report line %d: %s; using the zero range", self.line + 1, exc)
            span = Range.zero()
        suggestion = normalize_suggestion("\n".join(self.suggestion_lines)) if self.suggestion_lines else None
        return Finding(
            message="\n".join(self.message_lines).strip(),
            suggestion=suggestion,
            range=span,
            rule_id=self.rule_id,
            rule_doc_uri=self.rule_doc_uri,
        )


@dataclass(slots=True)
class _FileDraft:
    file_path: str
    findings: list[Finding] = field(default_factory=list)

    def build(self) -> FileReport:
        return FileReport(file_path=self.file_path, findings=tuple(self.findings))


def _build_range(location: list[Token] | None) -> Range:
    """Interpret the tokens collected from a ``location:`` block.

    Args:
        location: Tokens found inside the block, or ``None`` when the problem
            had no ``location:`` key at all.

    Returns:
        Range: Range described by the four coordinates.

    Raises:
        ParseAnomaly: If the block is missing, incomplete, out of order,
            holds non-integer values, or describes an end before its start.
    """

    if location is None:
        raise ParseAnomaly("missing location block")
    layout = tuple(token.marker for token in location)
    if layout != _LOCATION_LAYOUT:
        raise ParseAnomaly(f"unexpected location layout {[marker.value for marker in layout]}")
    coordinates: list[int] = []
    for token in location:
        if token.marker not in (Marker.LINE_NUMBER, Marker.COLUMN_NUMBER):
            continue
        value = coerce_coordinate(token.value)
        if value is None:
            raise ParseAnomaly(f"{token.marker.value} is not a non-negative integer: {token.value!r}")
        coordinates.append(value)
    start_line, start_column, end_line, end_column = coordinates
    try:
        return Range.from_coordinates(start_line, start_column, end_line, end_column)
    except ValidationError as exc:
        raise ParseAnomaly(f"invalid range: {exc.errors()[0]['msg']}") from exc


class ReportScanner:
    """Single-pass scanner holding the explicit cursor state for one parse."""

    def __init__(self) -> None:
        self._state = ScanState.EXPECT_FILE_HEADER
        self._reports: list[FileReport] = []
        self._file: _FileDraft | None = None
        self._draft: _FindingDraft | None = None

    @property
    def state(self) -> ScanState:
        """Return the current scanner state."""

        return self._state

    def feed(self, line: int, token: Token) -> None:
        """Advance the state machine with one token.

        Args:
            line: Zero-based index of the report line holding ``token``.
            token: Token produced by :func:`~aiplint.parsers.base.tokenize_line`.
        """

        marker = token.marker
        if marker is Marker.FILE_PATH:
            self._open_file(token.value)
        elif marker is Marker.PROBLEMS:
            return
        elif marker is Marker.MESSAGE:
            self._open_problem(line, token.value)
        elif self._draft is None:
            return
        elif marker is Marker.SUGGESTION:
            self._draft.suggestion_lines = [token.value] if token.value else []
            self._state = ScanState.IN_SUGGESTION
        elif marker is Marker.LOCATION:
            self._draft.location = []
            self._state = ScanState.IN_LOCATION
        elif marker in POSITION_MARKERS:
            if self._state is ScanState.IN_LOCATION and self._draft.location is not None:
                self._draft.location.append(token)
        elif marker is Marker.RULE_ID:
            self._draft.rule_id = token.value
            self._state = ScanState.AFTER_LOCATION
        elif marker is Marker.RULE_DOC_URI:
            self._draft.rule_doc_uri = token.value
            self._state = ScanState.AFTER_LOCATION
        else:
            self._feed_text(token.value)

    def _feed_text(self, text: str) -> None:
        draft = self._draft
        if draft is None:
            return
        if self._state is ScanState.IN_MESSAGE:
            draft.message_lines.append(text)
        elif self._state is ScanState.IN_SUGGESTION:
            draft.suggestion_lines.append(text)
        elif self._state is ScanState.IN_LOCATION and draft.location is not None:
            draft.location.append(Token(Marker.TEXT, text))

    def _open_file(self, file_path: str) -> None:
        self._close_file()
        self._file = _FileDraft(file_path=file_path)
        self._state = ScanState.EXPECT_PROBLEM

    def _open_problem(self, line: int, message: str) -> None:
        self._close_problem()
        if self._file is None:
            LOGGER.debug("problem at report line %d precedes any file_path header; skipping", line + 1)
            self._state = ScanState.EXPECT_FILE_HEADER
            return
        self._draft = _FindingDraft(line=line)
        if message and not is_block_indicator(message):
            self._draft.message_lines.append(message)
        self._state = ScanState.IN_MESSAGE

    def _close_problem(self) -> None:
        if self._draft is not None and self._file is not None:
            self._file.findings.append(self._draft.build())
        self._draft = None

    def _close_file(self) -> None:
        self._close_problem()
        if self._file is not None:
            self._reports.append(self._file.build())
        self._file = None

    def finish(self) -> list[FileReport]:
        """Close any open problem and file and return the collected reports."""

        self._close_file()
        self._state = ScanState.EXPECT_FILE_HEADER
        reports, self._reports = self._reports, []
        return reports


def parse_report(raw_text: str | Sequence[str] | None) -> list[FileReport]:
    """Parse linter output into per-file reports.

    The function is total: empty, partial or garbled input yields a (possibly
    empty) list and never raises. Findings keep the order of their problem
    items in ``raw_text``.

    Args:
        raw_text: Linter standard output, either as text or as a sequence of lines.

    Returns:
        list[FileReport]: One report per ``- file_path:`` header, in output order.
    """

    scanner = ReportScanner()
    for line, token in iter_tokens(raw_text):
        scanner.feed(line, token)
    return scanner.finish()


__all__ = ["ReportScanner", "ScanState", "parse_report"]
