r"""
changes — Parse and pretty-print free-form project changelogs.

    >>> from changes import parse, render
    >>> changelog = parse("## 1.0.0 (2020-01-01)\n- First release\n")
    >>> render(changelog)
    '## 1.0.0 (2020-01-01)\n- First release\n'
"""

from changes.errors import ChangesError, ParseError
from changes.models import Change, Changelog, Release, Section, SectionTitle
from changes.parser import parse, parse_stream
from changes.render import normalize, render

__version__ = "0.3.0"

__all__ = [
    "Change",
    "Changelog",
    "ChangesError",
    "ParseError",
    "Release",
    "Section",
    "SectionTitle",
    "normalize",
    "parse",
    "parse_stream",
    "render",
]
