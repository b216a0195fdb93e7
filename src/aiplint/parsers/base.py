# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared tokenizer infrastructure for the linter's YAML-like report text."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

SUGGESTION_PLACEHOLDER: Final[str] = "TODO"
BLOCK_SCALAR_INDICATORS: Final[frozenset[str]] = frozenset({"|", "|-", "|+", ">", ">-", ">+"})


class Marker(str, Enum):
    """Keys recognised in the report grammar, plus ``TEXT`` for free text."""

    FILE_PATH = "file_path"
    PROBLEMS = "problems"
    MESSAGE = "message"
    SUGGESTION = "suggestion"
    LOCATION = "location"
    START_POSITION = "start_position"
    END_POSITION = "end_position"
    LINE_NUMBER = "line_number"
    COLUMN_NUMBER = "column_number"
    RULE_ID = "rule_id"
    RULE_DOC_URI = "rule_doc_uri"
    TEXT = "text"


# ``file_path`` and ``message`` open list items and only count with a leading dash.
_DASHED_KEYS: Final[frozenset[Marker]] = frozenset({Marker.FILE_PATH, Marker.MESSAGE})
_KEY_ALTERNATION: Final[str] = "|".join(
    sorted((marker.value for marker in Marker if marker is not Marker.TEXT), key=len, reverse=True)
)
_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"(?:^|(?<=\s))(?P<dash>-\s+)?(?P<key>{_KEY_ALTERNATION}):(?=\s|$)",
)

POSITION_MARKERS: Final[frozenset[Marker]] = frozenset(
    {Marker.START_POSITION, Marker.END_POSITION, Marker.LINE_NUMBER, Marker.COLUMN_NUMBER}
)


@dataclass(frozen=True, slots=True)
class Token:
    """A key (or free text run) and the value text that follows it on the line."""

    marker: Marker
    value: str


def ensure_lines(value: str | Sequence[str] | None) -> list[str]:
    """Normalise string-based output into a list of lines."""

    if value is None:
        return []
    if isinstance(value, str):
        return value.splitlines()
    return [str(item) for item in value]


def _is_key(match: re.Match[str]) -> bool:
    marker = Marker(match.group("key"))
    if marker is Marker.PROBLEMS:
        return match.start() == 0
    if marker in _DASHED_KEYS:
        return match.group("dash") is not None
    return True


def tokenize_line(line: str) -> Iterator[Token]:
    """Split one report line into tokens.

    A line usually holds a single ``key: value`` pair, but the linter
    occasionally interleaves several keys on one line (for example a
    ``suggestion:`` fragment appended to a message). Every recognised key
    starts a new token; text before the first key becomes a ``TEXT`` token.
    A ``message:`` or ``file_path:`` key without its list dash is plain text.

    Args:
        line: Raw line from the linter output.

    Yields:
        Token: Tokens in left-to-right order. Blank lines yield nothing.
    """

    stripped = line.strip()
    if not stripped:
        return
    matches = [match for match in _KEY_PATTERN.finditer(stripped) if _is_key(match)]
    if not matches:
        yield Token(Marker.TEXT, stripped)
        return
    leading = stripped[: matches[0].start()].strip()
    if leading:
        yield Token(Marker.TEXT, leading)
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(stripped)
        yield Token(Marker(match.group("key")), stripped[match.end() : end].strip())


def iter_tokens(text: str | Sequence[str] | None) -> Iterator[tuple[int, Token]]:
    """Yield ``(line_index, token)`` pairs for every line of ``text``."""

    for index, line in enumerate(ensure_lines(text)):
        for token in tokenize_line(line):
            yield index, token


def coerce_coordinate(value: str) -> int | None:
    """Return ``value`` as a non-negative integer, or ``None`` when it is not one."""

    candidate = value.strip()
    if not (candidate.isascii() and candidate.isdigit()):
        return None
    return int(candidate)


def normalize_suggestion(value: str | None) -> str | None:
    """Return ``None`` for empty suggestions and the ``TODO`` placeholder."""

    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed or trimmed == SUGGESTION_PLACEHOLDER:
        return None
    return trimmed


def is_block_indicator(value: str) -> bool:
    """Return ``True`` when ``value`` is a YAML block scalar header such as ``|``."""

    return value.strip() in BLOCK_SCALAR_INDICATORS


__all__ = [
    "BLOCK_SCALAR_INDICATORS",
    "Marker",
    "POSITION_MARKERS",
    "SUGGESTION_PLACEHOLDER",
    "Token",
    "coerce_coordinate",
    "ensure_lines",
    "is_block_indicator",
    "iter_tokens",
    "normalize_suggestion",
    "tokenize_line",
]
