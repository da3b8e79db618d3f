"""
changes — Changelog renderer.

Replays the formatting recorded at parse time: header style, underline
glyph and length, trailing separators, date layout, bullet glyph.
Continuation lines of a change are always re-indented by two spaces,
whatever column they started at in the source.
"""

from __future__ import annotations

from changes.models import Change, Changelog, Release, Section, SectionTitle
from changes.models.formats import (
    CLOSING,
    AtxHeader,
    AtxTitle,
    Custom,
    DayMonthYear,
    FullDate,
    MonthYear,
    SetextHeader,
    SetextTitle,
)
from changes.parser import parse
from changes.utils.logging import logger, step_timer

CONTINUATION_INDENT = "  "


def render_date(date: FullDate | MonthYear | DayMonthYear | Custom) -> str:
    if isinstance(date, FullDate):
        body = date.separator.join((date.year, date.month, date.day))
    elif isinstance(date, MonthYear):
        body = f"{date.month_name} {date.year}"
    elif isinstance(date, DayMonthYear):
        body = f"{date.day} {date.month} {date.year}"
    else:
        body = date.label
    return f"{date.enclosure}{body}{CLOSING[date.enclosure]}"


def render_header(release: Release) -> str:
    head = release.version
    if release.date is not None:
        head = f"{head} {render_date(release.date)}"

    fmt = release.header_format
    if isinstance(fmt, AtxHeader):
        return f"{'#' * fmt.level} {head}{fmt.trailing or ''}"
    if isinstance(fmt, SetextHeader):
        return f"{head}\n{fmt.glyph * fmt.length}"
    return f"{head}{fmt.trailing or ''}"


def render_title(title: SectionTitle) -> str:
    fmt = title.format
    if isinstance(fmt, AtxTitle):
        return f"{'#' * fmt.level} {title.text}{fmt.trailing or ''}"
    if isinstance(fmt, SetextTitle):
        return f"{title.text}\n{fmt.glyph * fmt.length}"
    return f"{title.text}{fmt.trailing or ''}"


def render_change(change: Change) -> str:
    first, *rest = change.description.split("\n")
    lines = [f"{change.bullet_glyph} {first}"]
    lines.extend(CONTINUATION_INDENT + line if line else "" for line in rest)
    return "\n".join(lines)


def render_section(section: Section) -> str:
    body = "\n".join(render_change(c) for c in section.changes)
    if section.title is None:
        return body
    if not body:
        return render_title(section.title)
    return f"{render_title(section.title)}\n{body}"


def render_release(release: Release) -> str:
    header = render_header(release)
    if not release.sections:
        return header
    sections = "\n\n".join(render_section(s) for s in release.sections)
    return f"{header}\n{sections}"


def render(changelog: Changelog) -> str:
    """Render a whole changelog; the empty changelog renders as ''."""
    if not changelog.releases:
        return ""
    with step_timer("Render changelog"):
        text = "\n\n".join(render_release(r) for r in changelog.releases) + "\n"
    logger.debug("  Rendered %d releases (%d chars)", len(changelog), len(text))
    return text


def normalize(text: str) -> str:
    """Parse and re-render, canonicalising layout while keeping markup choices."""
    return render(parse(text))

