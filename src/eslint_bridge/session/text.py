# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Position arithmetic over a captured document text."""

from __future__ import annotations

import bisect
import re
from typing import Final

from ..core.errors import InvalidLocationError

_LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")
_WORD_AT: Final[re.Pattern[str]] = re.compile(r"\w+")


class TextIndex:
    """Line table for one snapshot of a document's text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._line_starts: list[int] = [0]
        self._line_ends: list[int] = []
        for match in _LINE_BREAK.finditer(text):
            self._line_ends.append(match.start())
            self._line_starts.append(match.end())
        self._line_ends.append(len(text))

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_length(self, row: int) -> int:
        return self._line_ends[row] - self._line_starts[row]

    def line_text(self, row: int) -> str:
        return self._text[self._line_starts[row] : self._line_ends[row]]

    def validate_point(self, row: int, column: int) -> None:
        """Raise when ``(row, column)`` falls outside the text.

        Raises:
            InvalidLocationError: If the row or column is out of bounds.
        """

        if row < 0 or row >= self.line_count:
            raise InvalidLocationError(f"Line {row + 1} is outside the document ({self.line_count} lines)")
        if column < 0 or column > self.line_length(row):
            raise InvalidLocationError(f"Column {column + 1} is outside line {row + 1}")

    def position_for_offset(self, offset: int) -> tuple[int, int]:
        """Convert a character offset into a ``(row, column)`` pair.

        Offsets beyond the text clamp to its end; offsets inside a line break
        land at the end of the line before it.
        """

        clamped = min(max(offset, 0), len(self._text))
        row = bisect.bisect_right(self._line_starts, clamped) - 1
        column = min(clamped - self._line_starts[row], self.line_length(row))
        return (row, column)

    def word_range(self, row: int, column: int) -> tuple[tuple[int, int], tuple[int, int]]:
        """Return the range of the word, or single character, starting at the point.

        A point at the very end of a line yields an empty range.
        """

        self.validate_point(row, column)
        remainder = self.line_text(row)[column:]
        match = _WORD_AT.match(remainder)
        if match is not None:
            end_column = column + match.end()
        else:
            end_column = column + (1 if remainder else 0)
        return ((row, column), (row, end_column))


__all__ = ["TextIndex"]
