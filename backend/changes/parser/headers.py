"""
changes — Release header and section title recognition.

Release headers are tried in order ATX, Setext, Ascii. A header line
is ``version [date] [:]``; Setext additionally needs an underline on
the next line, which is also what keeps a Setext header from being
read as an Ascii one.

Plain text lines are ambiguous between release headers and section
titles ("Bug fixes:" vs "2.1.0:"), so a non-ATX candidate only counts
as a release when its version looks like one.
"""

from __future__ import annotations

from dataclasses import dataclass

from changes.models.formats import (
    AsciiHeader,
    AsciiTitle,
    AtxHeader,
    AtxTitle,
    SetextHeader,
    SetextTitle,
)
from changes.parser.dates import ScannedDate, scan_date
from changes.parser.lines import UNDERLINE_PATTERN, Line, Miss, skip_blanks, underline
from changes.parser.state import ParseState

VERSION_PUNCTUATION = frozenset(" .~+,\"#-_/")
UNRELEASED_LABELS = frozenset({"unreleased", "next", "upcoming", "dev", "tbd"})


@dataclass(frozen=True)
class HeadLine:
    version: str
    date: ScannedDate | None
    date_column: int
    trailing: str | None


@dataclass(frozen=True)
class ReleaseHeaderMatch:
    head: HeadLine
    header_format: AtxHeader | SetextHeader | AsciiHeader
    consumed: int


@dataclass(frozen=True)
class SectionTitleMatch:
    text: str
    title_format: AtxTitle | SetextTitle | AsciiTitle
    consumed: int


def _is_version_char(ch: str) -> bool:
    return ch.isalnum() or ch in VERSION_PUNCTUATION


def scan_head(text: str, pos: int) -> HeadLine | Miss:
    """Parse ``version [date] [:]`` up to the end of the line."""
    if pos >= len(text) or not text[pos].isalnum():
        return Miss(pos, "a version")
    end = pos
    while end < len(text) and _is_version_char(text[end]):
        end += 1
    version = text[pos:end].strip()

    cursor = end
    date = None
    date_column = 0
    if cursor < len(text) and text[cursor] in "([":
        scanned = scan_date(text, cursor)
        if isinstance(scanned, Miss):
            return scanned
        date_column = cursor
        date, cursor = scanned
        cursor = skip_blanks(text, cursor)

    trailing = None
    if cursor < len(text) and text[cursor] == ":":
        trailing = ":"
        cursor = skip_blanks(text, cursor + 1)

    if cursor < len(text):
        if trailing is not None:
            return Miss(cursor, "end of line")
        if date is None:
            return Miss(cursor, "a date, ':' or end of line")
        return Miss(cursor, "':' or end of line")
    return HeadLine(version=version, date=date, date_column=date_column, trailing=trailing)


def looks_like_version(head: HeadLine) -> bool:
    """Tell a release version apart from section-title prose."""
    version = head.version
    if version.lower() in UNRELEASED_LABELS:
        return True
    if not any(ch.isdigit() for ch in version):
        return False
    return head.date is not None or len(version.split()) == 1


def _atx_prefix(text: str) -> tuple[int, int] | Miss:
    """Return (level, start of heading text) for ``#+ blank+``."""
    level = len(text) - len(text.lstrip("#"))
    if level == len(text):
        return Miss(level, "heading text")
    if text[level] not in " \t":
        return Miss(level, "a space after '#'")
    return level, skip_blanks(text, level)


def match_release_header(lines: list[Line], index: int, state: ParseState) -> ReleaseHeaderMatch | Miss:
    """Try ATX, then Setext, then Ascii at ``lines[index]``."""
    line = lines[index]
    text = line.text

    if text.startswith("#"):
        prefix = _atx_prefix(text)
        if isinstance(prefix, Miss):
            return prefix
        level, start = prefix
        head = scan_head(text, start)
        if isinstance(head, Miss):
            return head
        if state.release_level is not None:
            is_release = level == state.release_level
        else:
            is_release = state.releases_seen == 0 or looks_like_version(head)
        if not is_release:
            return Miss(0, "a release header")
        return ReleaseHeaderMatch(head, AtxHeader(level=level, trailing=head.trailing), 1)

    if line.indent:
        return Miss(0, "a release header")
    head = scan_head(text, 0)
    if isinstance(head, Miss):
        return head
    if not looks_like_version(head):
        return Miss(0, "a release header")

    following = lines[index + 1] if index + 1 < len(lines) else None
    rule = underline(following)
    if rule is not None:
        glyph, length = rule
        return ReleaseHeaderMatch(head, SetextHeader(glyph=glyph, length=length), 2)
    return ReleaseHeaderMatch(head, AsciiHeader(trailing=head.trailing), 1)


def _split_trailing(text: str) -> tuple[str, str | None]:
    if text.endswith(":") and text[:-1].strip():
        return text[:-1].rstrip(), ":"
    return text, None


def match_section_title(lines: list[Line], index: int) -> SectionTitleMatch | Miss:
    """Recognise an ATX, Setext or plain title line."""
    line = lines[index]
    text = line.text.strip()

    # A bare rule would be read back as the underline of the line above it.
    if UNDERLINE_PATTERN.match(text):
        return Miss(line.indent, "a section title")

    if text.startswith("#"):
        prefix = _atx_prefix(text)
        if isinstance(prefix, Miss):
            return Miss(line.indent + prefix.column, prefix.expected)
        level, start = prefix
        title, trailing = _split_trailing(text[start:].rstrip())
        return SectionTitleMatch(title, AtxTitle(level=level, trailing=trailing), 1)

    following = lines[index + 1] if index + 1 < len(lines) else None
    rule = underline(following)
    if rule is not None:
        glyph, length = rule
        return SectionTitleMatch(text, SetextTitle(glyph=glyph, length=length), 2)

    title, trailing = _split_trailing(text)
    return SectionTitleMatch(title, AsciiTitle(trailing=trailing), 1)
