# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic synthesis and publish sinks."""

from __future__ import annotations

import io
import json

from rich.console import Console

from aiplint.core.logging import ConsolePreferences
from aiplint.core.models import Finding, iter_findings
from aiplint.core.positions import Range
from aiplint.core.severity import Severity
from aiplint.diagnostics import (
    ConsoleDiagnosticSink,
    InMemoryDiagnosticSink,
    JsonDiagnosticSink,
    synthesize,
    synthesize_all,
)
from aiplint.parsers import parse_report

URI = "file:///work/a.proto"


def test_end_to_end_record(a_proto_report: str) -> None:
    (finding,) = iter_findings(parse_report(a_proto_report))

    record = synthesize(finding, URI)

    assert record.severity is Severity.WARNING
    assert record.message == "field name must be snake_case"
    assert record.range == Range.from_coordinates(3, 2, 3, 10)
    assert record.code == "core::0122"
    assert record.code_description == "https://google.aip.dev/122"
    assert [entry.message for entry in record.related] == ["core::0122 : https://google.aip.dev/122"]
    assert record.related[0].uri == URI
    assert record.related[0].range == finding.range


def test_suggestion_precedes_rule_reference() -> None:
    finding = Finding(message="bad", rule_id="core::0131", rule_doc_uri="https://google.aip.dev/131")

    record = synthesize(finding.with_suggestion("rename it"), URI)

    assert [entry.message for entry in record.related] == ["rename it", "core::0131 : https://google.aip.dev/131"]


def test_related_information_disabled() -> None:
    finding = Finding(message="bad", rule_id="core::0131", suggestion="rename it")

    record = synthesize(finding, URI, related_information=False)

    assert record.related == ()


def test_empty_rule_fields_map_to_none() -> None:
    record = synthesize(Finding(message="bad"), URI)

    assert record.code is None
    assert record.code_description is None
    assert record.severity is Severity.WARNING


def test_synthesize_all_preserves_order() -> None:
    findings = [Finding(message=f"m{index}") for index in range(4)]

    records = synthesize_all(findings, URI)

    assert [record.message for record in records] == ["m0", "m1", "m2", "m3"]


def test_lsp_payload_shape(a_proto_report: str) -> None:
    (finding,) = iter_findings(parse_report(a_proto_report))

    payload = synthesize(finding, URI).to_lsp()

    assert payload == {
        "range": {"start": {"line": 3, "character": 2}, "end": {"line": 3, "character": 10}},
        "severity": 2,
        "source": "api-linter",
        "message": "field name must be snake_case",
        "code": "core::0122",
        "codeDescription": {"href": "https://google.aip.dev/122"},
        "relatedInformation": [
            {
                "location": {
                    "uri": URI,
                    "range": {"start": {"line": 3, "character": 2}, "end": {"line": 3, "character": 10}},
                },
                "message": "core::0122 : https://google.aip.dev/122",
            }
        ],
    }


def test_in_memory_sink_replaces_previous_set() -> None:
    sink = InMemoryDiagnosticSink()
    first = synthesize_all([Finding(message="a"), Finding(message="b")], URI)

    sink.publish(URI, first)
    sink.publish(URI, [])

    assert sink.diagnostics_for(URI) == ()
    assert [len(event.diagnostics) for event in sink.events] == [2, 0]
    assert sink.diagnostics_for("file:///other.proto") is None


def test_json_sink_writes_one_line_per_publish() -> None:
    stream = io.StringIO()
    sink = JsonDiagnosticSink(stream)

    sink.publish(URI, synthesize_all([Finding(message="a")], URI))
    sink.publish(URI, [])

    first, second = (json.loads(line) for line in stream.getvalue().splitlines())
    assert first["uri"] == URI
    assert first["diagnostics"][0]["message"] == "a"
    assert second == {"uri": URI, "diagnostics": []}


def test_console_sink_renders_table() -> None:
    buffer = io.StringIO()
    sink = ConsoleDiagnosticSink(
        ConsolePreferences(color=False, emoji=False),
        console=Console(file=buffer, width=200, color_system=None),
    )

    sink.publish(URI, synthesize_all([Finding(message="field name must be snake_case", rule_id="core::0122")], URI))

    output = buffer.getvalue()
    assert "core::0122" in output
    assert "field name must be snake_case" in output


def test_console_sink_marks_locations_only_with_emoji() -> None:
    findings = synthesize_all([Finding(message="bad", range=Range.from_coordinates(2, 4, 2, 9))], URI)
    outputs = []
    for preferences in (ConsolePreferences(color=False, emoji=True), ConsolePreferences(color=False, emoji=False)):
        buffer = io.StringIO()
        ConsoleDiagnosticSink(preferences, console=Console(file=buffer, width=200, color_system=None)).publish(URI, findings)
        outputs.append(buffer.getvalue())

    with_emoji, without_emoji = outputs
    assert "⚠️" in with_emoji
    assert "⚠️" not in without_emoji
    assert "2:4" in without_emoji
