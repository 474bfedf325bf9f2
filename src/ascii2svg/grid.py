"""Character grid with consumed-cell tracking.

The grid is built once from the diagram text and then shared by every scan
pass. Lookups are total: anything outside the grid reads as a blank.
"""
from __future__ import annotations

import numpy as np

from .chars import BLANK, is_ascii_letter

# Marker glyphs that read as decorations on their own but as letters inside
# words. Inside words they are swapped for private-use placeholders.
HIDDEN_MARKERS = {
    "o": "\ue000",
    "v": "\ue001",
    "V": "\ue002",
}
_UNHIDE = {hidden: marker for marker, hidden in HIDDEN_MARKERS.items()}


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def remove_leading_space(lines: list[str]) -> list[str]:
    """Strip the indent shared by all non-blank lines."""
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    if not indents:
        return list(lines)
    indent = min(indents)
    if indent == 0:
        return list(lines)
    return [line[indent:] for line in lines]


def equalize_line_lengths(lines: list[str]) -> list[str]:
    width = max((len(line) for line in lines), default=0)
    return [line.ljust(width, BLANK) for line in lines]


def hide_markers(lines: list[str]) -> list[str]:
    """Replace o/v/V that touch a letter on the left or right with placeholders."""
    result: list[str] = []
    for line in lines:
        chars = list(line)
        for idx, c in enumerate(line):
            if c not in HIDDEN_MARKERS:
                continue
            left = line[idx - 1] if idx > 0 else BLANK
            right = line[idx + 1] if idx + 1 < len(line) else BLANK
            if is_ascii_letter(left) or is_ascii_letter(right):
                chars[idx] = HIDDEN_MARKERS[c]
        result.append("".join(chars))
    return result


def unhide_markers(text: str) -> str:
    return "".join(_UNHIDE.get(c, c) for c in text)


def preprocess(text: str) -> list[str]:
    lines = _split_lines(text)
    lines = remove_leading_space(lines)
    lines = equalize_line_lengths(lines)
    return hide_markers(lines)


class Grid:
    """Rectangular character matrix plus a parallel consumed bitmap."""

    def __init__(self, text: str) -> None:
        self._rows = [list(line) for line in preprocess(text)]
        self.height = len(self._rows)
        self.width = len(self._rows[0]) if self._rows else 0
        self._consumed = np.zeros((self.height, self.width), dtype=bool)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def _in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def lookup(self, col: int, row: int) -> str:
        if not self._in_bounds(col, row):
            return BLANK
        return self._rows[row][col]

    def mark_consumed(self, col: int, row: int) -> None:
        if self._in_bounds(col, row):
            self._consumed[row, col] = True

    def is_consumed(self, col: int, row: int) -> bool:
        if not self._in_bounds(col, row):
            return False
        return bool(self._consumed[row, col])

    def is_free(self, col: int, row: int) -> bool:
        """True for a visible cell nothing has claimed yet."""
        return self.lookup(col, row) != BLANK and not self.is_consumed(col, row)

    def consumed_cells(self) -> list[tuple[int, int]]:
        rows, cols = np.nonzero(self._consumed)
        return [(int(col), int(row)) for row, col in zip(rows, cols)]

    def rows(self) -> list[str]:
        """Normalized lines, with hidden markers still in placeholder form."""
        return ["".join(row) for row in self._rows]

    def find_text_start(self, from_col: int, row: int) -> int | None:
        for col in range(max(from_col, 0), self.width):
            if self.is_free(col, row):
                return col
        return None

    def extract_text(self, start_col: int, row: int, blank_run_threshold: int) -> str:
        """Collect a text run starting at (start_col, row) and consume its cells.

        The run ends after ``blank_run_threshold`` consecutive blanks (never,
        when the threshold is 0) or at the first consumed cell. Trailing blanks
        are dropped.
        """
        chars: list[str] = []
        blanks = 0
        for col in range(max(start_col, 0), self.width):
            c = self.lookup(col, row)
            if c == BLANK:
                blanks += 1
                if blank_run_threshold > 0 and blanks >= blank_run_threshold:
                    break
                chars.append(c)
            elif self.is_consumed(col, row):
                break
            else:
                blanks = 0
                chars.append(c)
                self.mark_consumed(col, row)
        return "".join(chars).rstrip(BLANK)
