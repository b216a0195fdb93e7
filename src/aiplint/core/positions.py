# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Zero-based positions and ranges addressing text inside a document."""

from __future__ import annotations

from functools import total_ordering

from pydantic import BaseModel, ConfigDict, Field, model_validator


@total_ordering
class Position(BaseModel):
    """Zero-based ``(line, column)`` coordinate, ordered lexicographically."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)

    def as_tuple(self) -> tuple[int, int]:
        """Return the coordinate as a ``(line, column)`` tuple."""

        return self.line, self.column

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()


class Range(BaseModel):
    """Span between two positions; ``start <= end`` and zero width is allowed."""

    model_config = ConfigDict(frozen=True)

    start: Position = Field(default_factory=Position)
    end: Position = Field(default_factory=Position)

    @model_validator(mode="after")
    def _check_order(self) -> Range:
        """Reject ranges whose end precedes their start.

        Returns:
            Range: The validated range.

        Raises:
            ValueError: If ``end`` precedes ``start``.
        """

        if self.end < self.start:
            raise ValueError(f"range end {self.end.as_tuple()} precedes start {self.start.as_tuple()}")
        return self

    @classmethod
    def zero(cls) -> Range:
        """Return the ``{{0,0},{0,0}}`` range used when a location is unknown."""

        return cls()

    @classmethod
    def from_coordinates(cls, start_line: int, start_column: int, end_line: int, end_column: int) -> Range:
        """Build a range from four integer coordinates.

        Args:
            start_line: Zero-based line of the first character.
            start_column: Zero-based column of the first character.
            end_line: Zero-based line of the end position.
            end_column: Zero-based column of the end position.

        Returns:
            Range: Range covering the supplied coordinates.

        Raises:
            pydantic.ValidationError: If a coordinate is negative or the end precedes the start.
        """

        return cls(
            start=Position(line=start_line, column=start_column),
            end=Position(line=end_line, column=end_column),
        )

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the range has zero width."""

        return self.start == self.end


def extract_range_text(text: str, span: Range) -> str:
    """Return the slice of ``text`` addressed by ``span``.

    Columns beyond the end of a line are clamped to the line length and lines
    beyond the end of the document yield an empty slice.

    Args:
        text: Full document text.
        span: Range to extract.

    Returns:
        str: Text covered by ``span`` with original line breaks preserved.
    """

    lines = text.split("\n")
    if span.start.line >= len(lines):
        return ""
    last_line = min(span.end.line, len(lines) - 1)
    if span.start.line == last_line:
        line = lines[last_line]
        end_column = span.end.column if span.end.line == last_line else len(line)
        return line[span.start.column : end_column]
    head = lines[span.start.line][span.start.column :]
    middle = lines[span.start.line + 1 : last_line]
    tail_line = lines[last_line]
    tail = tail_line[: span.end.column] if span.end.line == last_line else tail_line
    return "\n".join([head, *middle, tail])


__all__ = ["Position", "Range", "extract_range_text"]
