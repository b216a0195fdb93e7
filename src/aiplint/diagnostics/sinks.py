# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Publish sinks receiving complete diagnostic sets per document."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from threading import Lock
from typing import Protocol, TextIO, runtime_checkable

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.logging import ConsolePreferences, emoji
from ..core.models import DiagnosticRecord

WARNING_MARK = "⚠️ "


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver of diagnostic sets; each call replaces the document's previous set."""

    def publish(self, document_uri: str, diagnostics: Sequence[DiagnosticRecord]) -> None:
        """Replace the diagnostics displayed for ``document_uri``."""


@dataclass(frozen=True, slots=True)
class PublishEvent:
    """One recorded call to :meth:`InMemoryDiagnosticSink.publish`."""

    uri: str
    diagnostics: tuple[DiagnosticRecord, ...]


class InMemoryDiagnosticSink:
    """Thread-safe sink keeping the latest set per document and a publish log."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._current: dict[str, tuple[DiagnosticRecord, ...]] = {}
        self._log: list[PublishEvent] = []

    def publish(self, document_uri: str, diagnostics: Sequence[DiagnosticRecord]) -> None:
        snapshot = tuple(diagnostics)
        with self._lock:
            self._current[document_uri] = snapshot
            self._log.append(PublishEvent(uri=document_uri, diagnostics=snapshot))

    def diagnostics_for(self, document_uri: str) -> tuple[DiagnosticRecord, ...] | None:
        """Return the set currently published for ``document_uri``, if any."""

        with self._lock:
            return self._current.get(document_uri)

    @property
    def events(self) -> list[PublishEvent]:
        """Return a copy of every publish call in call order."""

        with self._lock:
            return list(self._log)


class ConsoleDiagnosticSink:
    """Render each published set as a Rich table.

    Colour and emoji follow ``preferences``; ``console`` overrides the shared
    stdout console those preferences select.
    """

    def __init__(self, preferences: ConsolePreferences | None = None, *, console: Console | None = None) -> None:
        self._preferences = preferences or ConsolePreferences()
        self._console = console or self._preferences.console()
        self._color = self._preferences.color

    def publish(self, document_uri: str, diagnostics: Sequence[DiagnosticRecord]) -> None:
        if not diagnostics:
            return
        table = Table(box=box.SIMPLE_HEAVY if self._color else box.SIMPLE, title=document_uri)
        table.add_column("Location", no_wrap=True)
        table.add_column("Rule", overflow="fold")
        table.add_column("Message", overflow="fold")
        for record in diagnostics:
            start = record.range.start
            location = f"{emoji(WARNING_MARK, self._preferences.emoji)}{start.line}:{start.column}"
            details = Text(record.message)
            for related in record.related:
                details.append(f"\n  {related.message}", style="dim" if self._color else None)
            table.add_row(location, record.code or "-", details)
        self._console.print(table)


class JsonDiagnosticSink:
    """Write each published set as one ``publishDiagnostics``-shaped JSON line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def publish(self, document_uri: str, diagnostics: Sequence[DiagnosticRecord]) -> None:
        payload = {"uri": document_uri, "diagnostics": [record.to_lsp() for record in diagnostics]}
        self._stream.write(json.dumps(payload) + "\n")
        self._stream.flush()


__all__ = [
    "ConsoleDiagnosticSink",
    "DiagnosticSink",
    "InMemoryDiagnosticSink",
    "JsonDiagnosticSink",
    "PublishEvent",
]
