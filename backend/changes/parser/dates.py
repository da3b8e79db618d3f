"""
changes — Release date recognition.

Dates appear in parentheses or brackets after the version:

  (2018-07-10)        FullDate, components kept as written
  [Oct 2018]          MonthYear
  (4 October 2018)    DayMonthYear
  (unreleased)        Custom
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from changes.models.formats import (
    CLOSING,
    Custom,
    DayMonthYear,
    FullDate,
    MonthYear,
    month_number,
)
from changes.parser.lines import Miss

NUMERIC_DATE_PATTERN = re.compile(r"^(\d+)([-/])(\d+)([-/])(\d+)$")
MONTH_YEAR_PATTERN = re.compile(r"^([A-Za-z]+)\.?\s+(\d{4})$")
DAY_MONTH_YEAR_PATTERN = re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\s+(\d{4})$")

DateValue = FullDate | MonthYear | DayMonthYear | Custom


@dataclass(frozen=True)
class MixedSeparatorDate:
    """
    A numeric date written with two different separators, e.g. ``2019/01-01``.

    It has no place in the document model; the parser rejects it once the
    header is committed to as a release.
    """

    year: str
    month: str
    separators: tuple[str, str]

    def separator_column(self, which: int) -> int:
        """Column of separator 0 or 1, relative to the start of the date body."""
        if which == 0:
            return len(self.year)
        return len(self.year) + 1 + len(self.month)


ScannedDate = DateValue | MixedSeparatorDate


def classify(body: str, enclosure: str) -> ScannedDate:
    """Pick the date variant for the text found between the delimiters."""
    m = NUMERIC_DATE_PATTERN.match(body)
    if m:
        year, first, month, second, day = m.groups()
        if first != second:
            return MixedSeparatorDate(year=year, month=month, separators=(first, second))
        return FullDate(year=year, month=month, day=day, separator=first, enclosure=enclosure)

    m = MONTH_YEAR_PATTERN.match(body)
    if m and month_number(m.group(1)):
        month, abbreviated = month_number(m.group(1))
        return MonthYear(month=month, year=m.group(2), abbreviated=abbreviated, enclosure=enclosure)

    m = DAY_MONTH_YEAR_PATTERN.match(body)
    if m and month_number(m.group(2)):
        return DayMonthYear(day=m.group(1), month=m.group(2), year=m.group(3), enclosure=enclosure)

    return Custom(label=body, enclosure=enclosure)


def scan_date(text: str, pos: int) -> tuple[ScannedDate, int] | Miss:
    """
    Read a delimited date starting at ``text[pos]``.

    Returns the date and the position just past the closing delimiter.
    """
    opening = text[pos]
    closing = CLOSING[opening]
    end = text.find(closing, pos + 1)
    if end < 0:
        return Miss(len(text), f"'{closing}' closing the date")
    body = " ".join(text[pos + 1:end].split())
    if not body:
        return Miss(pos + 1, "a date or release label")
    return classify(body, opening), end + 1
