# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import socketserver
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

A_PROTO_REPORT = """\
- file_path: a.proto
  problems:
    - message: field name must be snake_case
      location:
        start_position:
          line_number: 3
          column_number: 2
        end_position:
          line_number: 3
          column_number: 10
      rule_id: core::0122
      rule_doc_uri: https://google.aip.dev/122
"""


def problem_block(message: str, *, line: int = 1, rule: str = "core::0131") -> str:
    """Return one ``- message:`` item indented for a ``problems:`` list."""
    return (
        f"    - message: {message}\n"
        "      location:\n"
        "        start_position:\n"
        f"          line_number: {line}\n"
        "          column_number: 0\n"
        "        end_position:\n"
        f"          line_number: {line}\n"
        "          column_number: 4\n"
        f"      rule_id: {rule}\n"
        f"      rule_doc_uri: https://google.aip.dev/{rule.split('::')[-1].lstrip('0')}\n"
    )


def report_text(file_path: str, *messages: str) -> str:
    """Return a report for ``file_path`` holding one problem per message."""
    blocks = "".join(problem_block(message, line=index + 1) for index, message in enumerate(messages))
    return f"- file_path: {file_path}\n  problems:\n{blocks}"


@pytest.fixture
def a_proto_report() -> str:
    return A_PROTO_REPORT


@pytest.fixture
def proto_file(tmp_path: Path) -> Path:
    path = tmp_path / "a.proto"
    path.write_text(
        'syntax = "proto3";\n\nmessage Book {\n  string BookName = 1;\n}\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_report():
    """Return the :func:`report_text` builder."""
    return report_text


class _NonHttpHandler(socketserver.StreamRequestHandler):
    """Read one HTTP request, then answer with bytes that are not HTTP."""

    def handle(self) -> None:
        length = 0
        while line := self.rfile.readline():
            if line in (b"\r\n", b"\n"):
                break
            name, _, value = line.decode("latin-1").partition(":")
            if name.strip().lower() == "content-length":
                length = int(value.strip())
        self.rfile.read(length)
        self.wfile.write(b"NOT-HTTP garbage\r\n")


@pytest.fixture
def non_http_endpoint() -> Iterator[str]:
    """Yield a chat-completions URL served by a socket that replies with garbage."""
    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _NonHttpHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}/v1/chat/completions"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
