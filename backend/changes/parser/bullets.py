"""
changes — Bullet line recognition.
"""

from __future__ import annotations

from dataclasses import dataclass

from changes.parser.lines import BLANKS, Line, skip_blanks

BULLET_GLYPHS = "*-+"


@dataclass(frozen=True)
class BulletStart:
    glyph: str
    indent: int
    content_column: int


@dataclass(frozen=True)
class BulletMismatch:
    """A bullet line whose glyph differs from the one fixed for the section."""

    glyph: str
    indent: int


def match_bullet(line: Line, fixed_glyph: str | None) -> BulletStart | BulletMismatch | None:
    """
    Recognise ``[blanks] glyph blank+ text``.

    The glyph must be followed by whitespace and some text, so ``---``
    underlines and ``**bold**`` prose are never taken for bullets.
    """
    text = line.text
    indent = line.indent
    if indent >= len(text) or text[indent] not in BULLET_GLYPHS:
        return None
    glyph = text[indent]
    after = indent + 1
    if after >= len(text) or text[after] not in BLANKS:
        return None
    content = skip_blanks(text, after)
    if content >= len(text):
        return None
    if fixed_glyph is not None and glyph != fixed_glyph:
        return BulletMismatch(glyph=glyph, indent=indent)
    return BulletStart(glyph=glyph, indent=indent, content_column=content)
