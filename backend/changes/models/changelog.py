"""
changes — Typed changelog document model.

A changelog is an ordered sequence of releases; each release holds
sections, each section holds changes. All values are immutable and
compare structurally, so a parsed document can be checked against an
expected one with ``==``.
"""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from changes.models.formats import (
    AtxHeader,
    BulletGlyph,
    HeaderFormat,
    ReleaseDate,
    SectionFormat,
    AsciiTitle,
)


class Change(BaseModel):
    """One bullet item. Continuation lines are joined with newlines."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    description: str = Field(min_length=1)
    bullet_glyph: BulletGlyph = "*"


class SectionTitle(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str = Field(min_length=1)
    format: SectionFormat = Field(default_factory=AsciiTitle)


class Section(BaseModel):
    """A named group of changes; an untitled section is the release's default."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: SectionTitle | None = None
    changes: tuple[Change, ...] = ()


class Release(BaseModel):
    """
    One version's worth of notes.

    ``header_format`` and the date's own fields record how the header
    was written so that rendering reproduces it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(min_length=1)
    header_format: HeaderFormat = Field(default_factory=AtxHeader)
    date: ReleaseDate | None = None
    sections: tuple[Section, ...] = ()

    @field_validator("version")
    @classmethod
    def _strip_version(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("version must not be blank")
        return v

    @property
    def changes(self) -> tuple[Change, ...]:
        """All changes of the release, flattened across sections."""
        return tuple(c for s in self.sections for c in s.changes)


class Changelog(BaseModel):
    """A whole changelog document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    releases: tuple[Release, ...] = ()

    def __len__(self) -> int:
        return len(self.releases)

    def __iter__(self) -> Iterator[Release]:  # type: ignore[override]
        return iter(self.releases)

    def __getitem__(self, index: int) -> Release:
        return self.releases[index]
