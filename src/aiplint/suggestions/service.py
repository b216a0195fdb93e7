# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Request/response contract of the remote suggestion service and its HTTP client."""

from __future__ import annotations

import http.client
import json
import os
import ssl
import urllib.error
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final, Protocol, runtime_checkable
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict

from ..core.errors import SuggestionServiceError
from ..core.models import Finding
from ..parsers.render import render_finding

DEFAULT_ENDPOINT: Final[str] = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL: Final[str] = "gpt-3.5-turbo"
DEFAULT_API_KEY_ENV: Final[str] = "OPENAI_API_KEY"
_SUPPORTED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
_USER_AGENT: Final[str] = "aiplint-suggestions/1.0"

PROMPT_TEMPLATE: Final[str] = (
    "For the following linting item:\n\n{finding}\n\n"
    "refer to the .proto file it was generated from:\n\n{document}\n\n"
    "The item points at this text:\n\n{range_text}\n\n"
    "Suggest a fix to the code such that the linting message is addressed. "
    "Return only the suggestion text, without any other content."
)


class SuggestionRequest(BaseModel):
    """Everything the suggestion service sees for one finding."""

    model_config = ConfigDict(frozen=True)

    document_text: str
    finding_range_text: str
    finding: Finding


@runtime_checkable
class SuggestionService(Protocol):
    """Collaborator proposing a textual fix for a finding."""

    def suggest(self, request: SuggestionRequest) -> str:
        """Return a suggestion for ``request``.

        Raises:
            SuggestionServiceError: If no suggestion can be produced.
        """


class NullSuggestionService:
    """Service used when suggestions are disabled; every request fails."""

    def suggest(self, request: SuggestionRequest) -> str:
        del request
        raise SuggestionServiceError("suggestions are disabled")


def build_prompt(request: SuggestionRequest) -> str:
    """Return the completion prompt for ``request``."""

    return PROMPT_TEMPLATE.format(
        finding=render_finding(request.finding),
        document=request.document_text,
        range_text=request.finding_range_text,
    )


Opener = Callable[..., Any]


def _default_opener(request: urllib.request.Request, *, timeout: float | None) -> Any:
    opener = urllib.request.build_opener(urllib.request.HTTPSHandler(context=ssl.create_default_context()))
    return opener.open(request, timeout=timeout)


@dataclass(slots=True)
class ChatCompletionSuggestionService:
    """Client for an OpenAI-compatible ``chat/completions`` endpoint."""

    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    temperature: float = 0.7
    api_key_env: str = DEFAULT_API_KEY_ENV
    timeout: float | None = 30.0
    extra_headers: Mapping[str, str] = field(default_factory=dict)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    opener: Opener = _default_opener

    def __post_init__(self) -> None:
        scheme = urlparse(self.endpoint).scheme.lower()
        if scheme not in _SUPPORTED_SCHEMES:
            raise ValueError(f"Unsupported suggestion endpoint scheme '{scheme}'")

    def _headers(self) -> dict[str, str]:
        api_key = self.environ.get(self.api_key_env)
        if not api_key:
            raise SuggestionServiceError(f"environment variable {self.api_key_env} is not set")
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
            "User-Agent": _USER_AGENT,
            **self.extra_headers,
        }

    def build_payload(self, request: SuggestionRequest) -> dict[str, Any]:
        """Return the JSON body sent for ``request``."""

        return {
            "model": self.model,
            "messages": [{"role": "user", "content": build_prompt(request)}],
            "temperature": self.temperature,
        }

    def suggest(self, request: SuggestionRequest) -> str:
        """Request a suggestion for one finding.

        Args:
            request: Document text, range text and the finding to fix.

        Returns:
            str: Suggestion text returned by the model.

        Raises:
            SuggestionServiceError: On a missing API key, a network, HTTP or
                protocol failure, a timeout, or a response without usable
                content.
        """

        body = json.dumps(self.build_payload(request)).encode("utf-8")
        http_request = urllib.request.Request(self.endpoint, data=body, headers=self._headers(), method="POST")
        try:
            with self.opener(http_request, timeout=self.timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as exc:
            raise SuggestionServiceError(f"suggestion service returned HTTP {exc.code}: {exc.reason}") from exc
        except urllib.error.URLError as exc:
            raise SuggestionServiceError(f"suggestion service unreachable: {exc.reason}") from exc
        except (OSError, http.client.HTTPException, ValueError) as exc:
            raise SuggestionServiceError(f"suggestion request failed: {exc}") from exc
        return _extract_content(raw)


def _extract_content(raw: bytes | str) -> str:
    """Return ``choices[0].message.content`` from a completion response.

    Raises:
        SuggestionServiceError: If the body is not JSON or lacks content.
    """

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SuggestionServiceError("suggestion service returned invalid JSON") from exc
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise SuggestionServiceError("suggestion service response has no message content") from exc
    if not isinstance(content, str) or not content.strip():
        raise SuggestionServiceError("suggestion service returned an empty suggestion")
    return content.strip()


__all__ = [
    "ChatCompletionSuggestionService",
    "DEFAULT_API_KEY_ENV",
    "DEFAULT_ENDPOINT",
    "DEFAULT_MODEL",
    "NullSuggestionService",
    "SuggestionRequest",
    "SuggestionService",
    "build_prompt",
]
