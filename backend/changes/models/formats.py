"""
changes — Formatting variants recorded at parse time.

Each variant is a tagged value (``kind``) so the renderer can replay
exactly the markup the parser saw: heading style, underline glyph and
length, trailing separators, date layout and enclosure.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

BulletGlyph = Literal["*", "-", "+"]
UnderlineGlyph = Literal["-", "="]
Trailing = Literal[":"]
Enclosure = Literal["(", "["]

MONTHS_SHORT = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTHS_LONG = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

CLOSING = {"(": ")", "[": "]"}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ── Release header formats ────────────────────────────────


class AtxHeader(_Frozen):
    """``## 1.0.0 (2020-01-01):``"""

    kind: Literal["atx"] = "atx"
    level: int = Field(default=2, ge=1)
    trailing: Trailing | None = None


class SetextHeader(_Frozen):
    """A version line underlined with ``-`` or ``=``."""

    kind: Literal["setext"] = "setext"
    glyph: UnderlineGlyph = "-"
    length: int = Field(default=3, ge=2)


class AsciiHeader(_Frozen):
    """``1.0.0 (2020-01-01):``"""

    kind: Literal["ascii"] = "ascii"
    trailing: Trailing | None = None


HeaderFormat = Annotated[
    Union[AtxHeader, SetextHeader, AsciiHeader],
    Field(discriminator="kind"),
]


# ── Section title formats ─────────────────────────────────


class AtxTitle(_Frozen):
    kind: Literal["atx"] = "atx"
    level: int = Field(default=3, ge=1)
    trailing: Trailing | None = None


class SetextTitle(_Frozen):
    kind: Literal["setext"] = "setext"
    glyph: UnderlineGlyph = "-"
    length: int = Field(default=3, ge=2)


class AsciiTitle(_Frozen):
    kind: Literal["ascii"] = "ascii"
    trailing: Trailing | None = None


SectionFormat = Annotated[
    Union[AtxTitle, SetextTitle, AsciiTitle],
    Field(discriminator="kind"),
]


# ── Release dates ─────────────────────────────────────────


class FullDate(_Frozen):
    """Numeric date; components are kept as written to preserve zero padding."""

    kind: Literal["full"] = "full"
    year: str = Field(pattern=r"^\d+$")
    month: str = Field(pattern=r"^\d+$")
    day: str = Field(pattern=r"^\d+$")
    separator: Literal["-", "/"] = "-"
    enclosure: Enclosure = "("


class MonthYear(_Frozen):
    kind: Literal["month_year"] = "month_year"
    month: int = Field(ge=1, le=12)
    year: str = Field(pattern=r"^\d+$")
    abbreviated: bool = False
    enclosure: Enclosure = "("

    @property
    def month_name(self) -> str:
        names = MONTHS_SHORT if self.abbreviated else MONTHS_LONG
        return names[self.month - 1]


class DayMonthYear(_Frozen):
    kind: Literal["day_month_year"] = "day_month_year"
    day: str = Field(pattern=r"^\d+$")
    month: str = Field(min_length=3)
    year: str = Field(pattern=r"^\d+$")
    enclosure: Enclosure = "("


class Custom(_Frozen):
    """Free-text placeholder such as ``unreleased``."""

    kind: Literal["custom"] = "custom"
    label: str = Field(min_length=1)
    enclosure: Enclosure = "("


ReleaseDate = Annotated[
    Union[FullDate, MonthYear, DayMonthYear, Custom],
    Field(discriminator="kind"),
]


def month_number(name: str) -> tuple[int, bool] | None:
    """Look up a month name; returns (1-based month, abbreviated) or None."""
    lowered = name.lower()
    for i, long_name in enumerate(MONTHS_LONG):
        if lowered == long_name.lower():
            return i + 1, False
    for i, short_name in enumerate(MONTHS_SHORT):
        if lowered == short_name.lower():
            return i + 1, True
    return None
