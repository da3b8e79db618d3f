"""
changes — Per-parse scan state.

A fresh ParseState is created for every parse call; nothing here is
shared between documents. The first bullet glyph, date separator and
release heading depth seen are sniffed once and then enforced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from changes.parser.lines import Miss


@dataclass
class ParseState:
    date_separator: str | None = None
    change_bullet: str | None = None
    threshold: int = 0
    release_level: int | None = None
    releases_seen: int = 0
    # (line index, release_level, releases_seen > 0) -> header match or Miss
    header_memo: dict[tuple[int, int | None, bool], Any] = field(default_factory=dict)
    # line index -> (farthest column, expectations at that column)
    misses: dict[int, tuple[int, list[str]]] = field(default_factory=dict)

    def note(self, index: int, miss: Miss) -> None:
        """Keep the farthest failure per line for error reporting."""
        prev = self.misses.get(index)
        if prev is None or miss.column > prev[0]:
            self.misses[index] = (miss.column, [miss.expected])
        elif miss.column == prev[0] and miss.expected not in prev[1]:
            prev[1].append(miss.expected)

    def reset_section(self) -> None:
        self.change_bullet = None
        self.threshold = 0
