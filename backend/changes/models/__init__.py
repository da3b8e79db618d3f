"""changes data models — immutable document model for parsed changelogs."""

from changes.models.changelog import (
    Change,
    Changelog,
    Release,
    Section,
    SectionTitle,
)
from changes.models.formats import (
    AsciiHeader,
    AsciiTitle,
    AtxHeader,
    AtxTitle,
    Custom,
    DayMonthYear,
    FullDate,
    MonthYear,
    SetextHeader,
    SetextTitle,
)

__all__ = [
    "Change",
    "Changelog",
    "Release",
    "Section",
    "SectionTitle",
    "AsciiHeader",
    "AsciiTitle",
    "AtxHeader",
    "AtxTitle",
    "Custom",
    "DayMonthYear",
    "FullDate",
    "MonthYear",
    "SetextHeader",
    "SetextTitle",
]
