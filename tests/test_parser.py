# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the api-linter report parser."""

from __future__ import annotations

import logging

import pytest

from aiplint.core.models import FileReport, Finding
from aiplint.core.positions import Range
from aiplint.parsers import Marker, ReportScanner, ScanState, Token, parse_report, tokenize_line


def test_parse_single_finding(a_proto_report: str) -> None:
    reports = parse_report(a_proto_report)

    assert reports == [
        FileReport(
            file_path="a.proto",
            findings=(
                Finding(
                    message="field name must be snake_case",
                    range=Range.from_coordinates(3, 2, 3, 10),
                    rule_id="core::0122",
                    rule_doc_uri="https://google.aip.dev/122",
                ),
            ),
        )
    ]
    assert reports[0].findings[0].suggestion is None


def test_parse_is_deterministic(make_report) -> None:
    raw = make_report("a.proto", "first", "second") + make_report("b.proto", "third")

    assert parse_report(raw) == parse_report(raw)


def test_parse_preserves_count_and_order(make_report) -> None:
    raw = make_report("a.proto", "alpha", "beta", "gamma")

    (report,) = parse_report(raw)

    assert [finding.message for finding in report.findings] == ["alpha", "beta", "gamma"]
    assert [finding.range.start.line for finding in report.findings] == [1, 2, 3]


def test_parse_multiple_files(make_report) -> None:
    raw = make_report("a.proto", "one") + make_report("dir/b.proto", "two", "three")

    reports = parse_report(raw)

    assert [report.file_path for report in reports] == ["a.proto", "dir/b.proto"]
    assert [len(report.findings) for report in reports] == [1, 2]


def test_parse_header_without_problems(make_report) -> None:
    raw = "- file_path: empty.proto\n  problems: []\n" + make_report("a.proto", "one")

    reports = parse_report(raw)

    assert reports[0] == FileReport(file_path="empty.proto")
    assert len(reports[1].findings) == 1


@pytest.mark.parametrize("raw", ["", None, "\n\n   \n", "garbage without keys"])
def test_parse_empty_or_unstructured_input(raw: str | None) -> None:
    assert parse_report(raw) == []


def test_parse_accepts_line_sequences(a_proto_report: str) -> None:
    assert parse_report(a_proto_report.splitlines()) == parse_report(a_proto_report)


def test_missing_fields_use_defaults() -> None:
    raw = "- file_path: a.proto\n  problems:\n    - message: no location here\n"

    (report,) = parse_report(raw)
    (finding,) = report.findings

    assert finding.message == "no location here"
    assert finding.range == Range.zero()
    assert finding.rule_id == ""
    assert finding.rule_doc_uri == ""
    assert finding.suggestion is None


@pytest.mark.parametrize(
    "location",
    [
        "        start_position:\n          line_number: x\n          column_number: 2\n"
        "        end_position:\n          line_number: 3\n          column_number: 10\n",
        "        start_position:\n          line_number: 3\n          column_number: 2\n",
        "        end_position:\n          line_number: 3\n          column_number: 10\n"
        "        start_position:\n          line_number: 3\n          column_number: 2\n",
        "        start_position:\n          line_number: 5\n          column_number: 0\n"
        "        end_position:\n          line_number: 1\n          column_number: 0\n",
    ],
    ids=["non-integer", "incomplete", "out-of-order", "end-before-start"],
)
def test_garbled_location_falls_back_to_zero_range(location: str, caplog: pytest.LogCaptureFixture) -> None:
    raw = (
        "- file_path: a.proto\n  problems:\n    - message: broken\n      location:\n"
        f"{location}      rule_id: core::0131\n"
    )

    with caplog.at_level(logging.DEBUG, logger="aiplint.parsers.report"):
        (report,) = parse_report(raw)

    (finding,) = report.findings
    assert finding.range == Range.zero()
    assert finding.rule_id == "core::0131"
    assert "zero range" in caplog.text


def test_todo_suggestion_is_absent() -> None:
    raw = "- file_path: a.proto\n  problems:\n    - message: bad\n      suggestion: TODO\n      rule_id: core::0122\n"

    (report,) = parse_report(raw)

    assert report.findings[0].suggestion is None


def test_suggestion_is_captured() -> None:
    raw = (
        "- file_path: a.proto\n  problems:\n    - message: bad\n"
        "      suggestion: rename the field to book_name\n      rule_id: core::0122\n"
    )

    (report,) = parse_report(raw)

    assert report.findings[0].suggestion == "rename the field to book_name"


def test_interleaved_fragment_on_message_line() -> None:
    raw = (
        "- file_path: a.proto\n  problems:\n"
        "    - message: field name must be snake_case suggestion: use book_name\n"
        "      rule_id: core::0122\n"
    )

    (report,) = parse_report(raw)
    (finding,) = report.findings

    assert finding.message == "field name must be snake_case"
    assert finding.suggestion == "use book_name"
    assert finding.rule_id == "core::0122"


def test_block_scalar_message_is_joined() -> None:
    raw = (
        "- file_path: a.proto\n  problems:\n    - message: |\n"
        "        first line\n        second line\n      rule_id: core::0140\n"
    )

    (report,) = parse_report(raw)

    assert report.findings[0].message == "first line\nsecond line"


def test_problem_before_file_header_is_ignored(a_proto_report: str) -> None:
    raw = "    - message: orphan\n      rule_id: core::0000\n" + a_proto_report

    reports = parse_report(raw)

    assert len(reports) == 1
    assert [finding.message for finding in reports[0].findings] == ["field name must be snake_case"]


def test_tokenize_line_requires_dash_for_list_keys() -> None:
    assert list(tokenize_line("message: plain text")) == [Token(Marker.TEXT, "message: plain text")]
    assert list(tokenize_line("- message: hello")) == [Token(Marker.MESSAGE, "hello")]


def test_tokenize_line_splits_interleaved_keys() -> None:
    tokens = list(tokenize_line("rule_id: core::0122 rule_doc_uri: https://google.aip.dev/122"))

    assert tokens == [
        Token(Marker.RULE_ID, "core::0122"),
        Token(Marker.RULE_DOC_URI, "https://google.aip.dev/122"),
    ]


def test_scanner_tracks_state() -> None:
    scanner = ReportScanner()
    assert scanner.state is ScanState.EXPECT_FILE_HEADER

    scanner.feed(0, Token(Marker.FILE_PATH, "a.proto"))
    assert scanner.state is ScanState.EXPECT_PROBLEM

    scanner.feed(1, Token(Marker.MESSAGE, "bad"))
    assert scanner.state is ScanState.IN_MESSAGE

    scanner.feed(2, Token(Marker.LOCATION, ""))
    assert scanner.state is ScanState.IN_LOCATION

    scanner.feed(3, Token(Marker.RULE_ID, "core::0122"))
    assert scanner.state is ScanState.AFTER_LOCATION

    reports = scanner.finish()
    assert reports[0].findings[0].rule_id == "core::0122"
    assert scanner.state is ScanState.EXPECT_FILE_HEADER
