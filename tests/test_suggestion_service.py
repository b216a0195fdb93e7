# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the chat-completion suggestion client."""

from __future__ import annotations

import http.client
import io
import json
import urllib.error
import urllib.request
from typing import Any

import pytest

from aiplint.core.errors import SuggestionServiceError
from aiplint.core.models import Finding
from aiplint.core.positions import Range
from aiplint.suggestions import ChatCompletionSuggestionService, NullSuggestionService, SuggestionRequest, build_prompt

REQUEST = SuggestionRequest(
    document_text="message Book {\n  string BookName = 1;\n}\n",
    finding_range_text="BookName",
    finding=Finding(
        message="field name must be snake_case",
        range=Range.from_coordinates(1, 9, 1, 17),
        rule_id="core::0122",
        rule_doc_uri="https://google.aip.dev/122",
    ),
)


class _FakeOpener:
    def __init__(self, body: bytes | Exception) -> None:
        self.body = body
        self.requests: list[tuple[urllib.request.Request, float | None]] = []

    def __call__(self, request: urllib.request.Request, *, timeout: float | None) -> Any:
        self.requests.append((request, timeout))
        if isinstance(self.body, Exception):
            raise self.body
        return io.BytesIO(self.body)


def _completion(content: str) -> bytes:
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]}).encode("utf-8")


def _service(opener: _FakeOpener, **overrides: Any) -> ChatCompletionSuggestionService:
    return ChatCompletionSuggestionService(environ={"OPENAI_API_KEY": "sk-test"}, opener=opener, **overrides)


def test_build_prompt_includes_context() -> None:
    prompt = build_prompt(REQUEST)

    assert "- message: field name must be snake_case" in prompt
    assert "suggestion: TODO" in prompt
    assert "string BookName = 1;" in prompt
    assert "BookName" in prompt


def test_suggest_posts_chat_completion() -> None:
    opener = _FakeOpener(_completion("  Rename the field to book_name.  "))
    service = _service(opener, timeout=5.0)

    assert service.suggest(REQUEST) == "Rename the field to book_name."

    (request, timeout), = opener.requests
    assert timeout == 5.0
    assert request.full_url == "https://api.openai.com/v1/chat/completions"
    assert request.get_method() == "POST"
    assert request.get_header("Authorization") == "Bearer sk-test"
    payload = json.loads(request.data)
    assert payload["model"] == "gpt-3.5-turbo"
    assert payload["temperature"] == 0.7
    assert payload["messages"][0]["role"] == "user"
    assert payload["messages"][0]["content"] == build_prompt(REQUEST)


def test_suggest_requires_api_key() -> None:
    service = ChatCompletionSuggestionService(environ={}, opener=_FakeOpener(_completion("x")))

    with pytest.raises(SuggestionServiceError, match="OPENAI_API_KEY"):
        service.suggest(REQUEST)


@pytest.mark.parametrize(
    "failure",
    [
        urllib.error.HTTPError("https://api.openai.com", 429, "Too Many Requests", None, None),
        urllib.error.URLError("no route to host"),
        TimeoutError("timed out"),
        http.client.BadStatusLine("garbage"),
        http.client.IncompleteRead(b"{\"choi"),
    ],
    ids=["http", "url", "timeout", "bad-status-line", "incomplete-read"],
)
def test_transport_failures_become_service_errors(failure: Exception) -> None:
    with pytest.raises(SuggestionServiceError):
        _service(_FakeOpener(failure)).suggest(REQUEST)


@pytest.mark.parametrize(
    "body",
    [b"not json", b"{}", json.dumps({"choices": []}).encode(), _completion("   ")],
    ids=["invalid-json", "no-choices", "empty-choices", "blank-content"],
)
def test_unusable_responses_raise(body: bytes) -> None:
    with pytest.raises(SuggestionServiceError):
        _service(_FakeOpener(body)).suggest(REQUEST)


def test_rejects_non_http_endpoint() -> None:
    with pytest.raises(ValueError, match="scheme"):
        ChatCompletionSuggestionService(endpoint="file:///etc/passwd")


def test_null_service_always_fails() -> None:
    with pytest.raises(SuggestionServiceError):
        NullSuggestionService().suggest(REQUEST)


def test_non_http_reply_becomes_service_error(non_http_endpoint: str) -> None:
    service = ChatCompletionSuggestionService(
        endpoint=non_http_endpoint,
        environ={"OPENAI_API_KEY": "sk-test"},
        timeout=5.0,
    )

    with pytest.raises(SuggestionServiceError, match="suggestion request failed"):
        service.suggest(REQUEST)
