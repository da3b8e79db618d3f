"""changes parser — text to Changelog."""

from changes.parser.engine import ChangelogParser, parse, parse_stream

__all__ = ["ChangelogParser", "parse", "parse_stream"]
