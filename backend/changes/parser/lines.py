"""
changes — Line scanning primitives.

The parser works over a list of physical lines. Each line remembers
its 1-based number and its offset in the normalised input so errors
can point at an exact position.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple

BLANKS = " \t"
TAB_WIDTH = 4

UNDERLINE_PATTERN = re.compile(r"^(-{2,}|={2,})[ \t]*$")


@dataclass(frozen=True)
class Line:
    number: int
    offset: int
    text: str
    # characters added by expanding tabs in the indentation
    expanded_by: int = 0

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def indent(self) -> int:
        return len(self.text) - len(self.text.lstrip(BLANKS))

    def source_column(self, column: int) -> int:
        """Map a column of the tab-expanded text back to the raw line."""
        if column < self.indent:
            return min(column, self.indent - self.expanded_by)
        return column - self.expanded_by


class Miss(NamedTuple):
    """A failed match: the column reached and what was expected there."""

    column: int
    expected: str


def normalise(text: str) -> str:
    """Unify line endings and drop a leading byte-order mark."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _expand_indent(raw: str) -> str:
    stripped = raw.lstrip(BLANKS)
    lead = raw[: len(raw) - len(stripped)]
    if "\t" not in lead:
        return raw
    return lead.expandtabs(TAB_WIDTH) + stripped


def split_lines(text: str) -> list[Line]:
    """Split normalised text into lines; a final newline does not add a line."""
    if not text:
        return []
    raw_lines = text.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()

    lines: list[Line] = []
    offset = 0
    for number, raw in enumerate(raw_lines, start=1):
        expanded = _expand_indent(raw)
        lines.append(Line(number=number, offset=offset, text=expanded, expanded_by=len(expanded) - len(raw)))
        offset += len(raw) + 1
    return lines


def skip_blanks(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in BLANKS:
        pos += 1
    return pos


def underline(line: Line | None) -> tuple[str, int] | None:
    """Return (glyph, length) when the line is a Setext underline."""
    if line is None:
        return None
    m = UNDERLINE_PATTERN.match(line.text)
    if not m:
        return None
    return m.group(1)[0], len(m.group(1))


def describe(text: str, column: int) -> str:
    """Short quotation of what sits at ``column`` for error messages."""
    rest = text[column:].rstrip()
    if not rest:
        return "end of line"
    if len(rest) > 24:
        rest = rest[:24] + "…"
    return repr(rest)
