"""
changes — Changelog parser.

Scans the input left to right, one release at a time:

  release   = header blank* (section (blank* section)*)?
  section   = (title blank*)? change+
  change    = bullet text (continuation)*

The first bullet glyph of a section and the first date separator of
the document are sniffed and then enforced. A document either parses
completely or raises a ParseError pointing at the farthest position
reached on the failing line.
"""

from __future__ import annotations

from typing import NoReturn, TextIO

from changes.errors import (
    InconsistentBulletError,
    InconsistentDateSeparatorError,
    ParseError,
    UnexpectedEndOfInputError,
    UnexpectedInputError,
    UnrecognizedHeaderError,
)
from changes.models import Change, Changelog, Release, Section, SectionTitle
from changes.models.formats import AtxHeader, FullDate
from changes.parser.bullets import BulletMismatch, BulletStart, match_bullet
from changes.parser.dates import MixedSeparatorDate
from changes.parser.headers import (
    HeadLine,
    ReleaseHeaderMatch,
    match_release_header,
    match_section_title,
)
from changes.parser.lines import Miss, describe, normalise, split_lines
from changes.parser.state import ParseState
from changes.utils.logging import logger, step_timer


class ChangelogParser:
    """Single-use parser; create one per document."""

    def __init__(self, text: str):
        self.text = normalise(text)
        self.lines = split_lines(self.text)
        self.state = ParseState()

    # ── Entry point ───────────────────────────────────────

    def parse(self) -> Changelog:
        releases: list[Release] = []
        index = self._skip_blank_lines(0)
        while index < len(self.lines):
            release, index = self._release(index)
            releases.append(release)
            index = self._skip_blank_lines(index)
        return Changelog(releases=tuple(releases))

    # ── Releases ──────────────────────────────────────────

    def _release_header(self, index: int) -> ReleaseHeaderMatch | Miss:
        key = (index, self.state.release_level, self.state.releases_seen > 0)
        memo = self.state.header_memo
        if key not in memo:
            memo[key] = match_release_header(self.lines, index, self.state)
        return memo[key]

    def _is_release_header(self, index: int) -> bool:
        return index < len(self.lines) and isinstance(self._release_header(index), ReleaseHeaderMatch)

    def _release(self, index: int) -> tuple[Release, int]:
        match = self._release_header(index)
        if isinstance(match, Miss):
            self._fail(UnrecognizedHeaderError, index, match)

        self._check_date_separator(match.head, index)
        if isinstance(match.header_format, AtxHeader) and self.state.release_level is None:
            self.state.release_level = match.header_format.level
        self.state.releases_seen += 1

        sections: list[Section] = []
        index = self._skip_blank_lines(index + match.consumed)
        while index < len(self.lines) and not self._is_release_header(index):
            section, index = self._section(index)
            sections.append(section)
            index = self._skip_blank_lines(index)

        release = Release(
            version=match.head.version,
            header_format=match.header_format,
            date=match.head.date,
            sections=tuple(sections),
        )
        logger.debug("  Release %s: %d sections", release.version, len(sections))
        return release, index

    def _check_date_separator(self, head: HeadLine, index: int) -> None:
        date = head.date
        if isinstance(date, FullDate):
            separators = (date.separator, date.separator)
        elif isinstance(date, MixedSeparatorDate):
            separators = date.separators
        else:
            return

        expected = self.state.date_separator or separators[0]
        for which, found in enumerate(separators):
            if found != expected:
                line = self.lines[index]
                if isinstance(date, MixedSeparatorDate):
                    within = date.separator_column(which)
                else:
                    within = len(date.year)
                column = line.source_column(head.date_column + 1 + within)
                raise InconsistentDateSeparatorError(
                    expected,
                    found,
                    line.number,
                    column + 1,
                    line.offset + column,
                )
        self.state.date_separator = expected

    # ── Sections ──────────────────────────────────────────

    def _section(self, index: int) -> tuple[Section, int]:
        self.state.reset_section()
        line = self.lines[index]
        title = None

        bullet = match_bullet(line, None)
        if bullet is None:
            self.state.note(index, Miss(line.indent, "a change bullet ('*', '-' or '+')"))
            titled = match_section_title(self.lines, index)
            if isinstance(titled, Miss):
                self._fail(UnexpectedInputError, index, titled)
            title = SectionTitle(text=titled.text, format=titled.title_format)

            index = self._skip_blank_lines(index + titled.consumed)
            expected = f"a change under section title {titled.text!r}"
            if index >= len(self.lines):
                self._fail_at_end(expected)
            bullet = match_bullet(self.lines[index], None)
            if bullet is None:
                self._fail(UnexpectedInputError, index, Miss(self.lines[index].indent, expected))

        changes, index = self._changes(index, bullet)
        return Section(title=title, changes=tuple(changes)), index

    # ── Changes ───────────────────────────────────────────

    def _changes(self, index: int, bullet: BulletStart) -> tuple[list[Change], int]:
        changes: list[Change] = []
        while True:
            change, index = self._change(index, bullet)
            changes.append(change)
            if index >= len(self.lines) or self.lines[index].is_blank or self._is_release_header(index):
                return changes, index

            line = self.lines[index]
            following = match_bullet(line, self.state.change_bullet)
            if isinstance(following, BulletMismatch):
                column = line.source_column(following.indent)
                raise InconsistentBulletError(
                    self.state.change_bullet,
                    following.glyph,
                    line.number,
                    column + 1,
                    line.offset + column,
                )
            if following is None:
                if line.indent == 0:
                    # A section title directly under the previous change.
                    return changes, index
                self._fail(
                    UnexpectedInputError,
                    index,
                    Miss(
                        line.indent,
                        f"text indented to column {self.state.threshold + 1} "
                        f"or a new '{self.state.change_bullet}' change",
                    ),
                )
            bullet = following

    def _change(self, index: int, bullet: BulletStart) -> tuple[Change, int]:
        if self.state.change_bullet is None:
            self.state.change_bullet = bullet.glyph
        threshold = bullet.content_column
        self.state.threshold = threshold

        parts = [self.lines[index].text[threshold:].rstrip()]
        index += 1
        # New bullets at the same or shallower indent and release headers
        # all start left of the threshold, so indentation alone ends a change.
        while index < len(self.lines):
            line = self.lines[index]
            if line.is_blank:
                resume = self._skip_blank_lines(index)
                if resume < len(self.lines) and self.lines[resume].indent >= threshold:
                    parts.extend([""] * (resume - index))
                    index = resume
                    continue
                break
            if line.indent < threshold:
                break
            parts.append(line.text[threshold:].rstrip())
            index += 1

        return Change(description="\n".join(parts), bullet_glyph=bullet.glyph), index

    # ── Helpers ───────────────────────────────────────────

    def _skip_blank_lines(self, index: int) -> int:
        while index < len(self.lines) and self.lines[index].is_blank:
            index += 1
        return index

    def _fail(self, error_cls: type[ParseError], index: int, miss: Miss) -> NoReturn:
        self.state.note(index, miss)
        column, expected = self.state.misses[index]
        line = self.lines[index]
        reason = f"expected {' or '.join(expected)}, found {describe(line.text, column)}"
        column = line.source_column(column)
        raise error_cls(reason, line.number, column + 1, line.offset + column, expected=expected)

    def _fail_at_end(self, expected: str) -> NoReturn:
        line_number = len(self.lines) + 1 if self.text.endswith("\n") else max(len(self.lines), 1)
        raise UnexpectedEndOfInputError(
            f"expected {expected}, found end of input",
            line_number,
            1,
            len(self.text),
            expected=[expected],
        )


def parse(text: str) -> Changelog:
    """Parse a complete changelog; raises ParseError on malformed input."""
    with step_timer("Parse changelog"):
        try:
            changelog = ChangelogParser(text).parse()
        except ParseError as exc:
            logger.warning("  Parse failed: %s [%s]", exc.message, exc.code)
            raise
        logger.info(
            "  Parsed %d releases, %d sections, %d changes",
            len(changelog),
            sum(len(r.sections) for r in changelog),
            sum(len(r.changes) for r in changelog),
        )
    return changelog


def parse_stream(fp: TextIO) -> Changelog:
    """Read a text stream to the end and parse it."""
    return parse(fp.read())
