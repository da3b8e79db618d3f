"""
changes — Structured error catalog.

Every error has a code, human message, and suggested fix.
Parse failures additionally carry the position of the farthest
progress the parser made and what it expected to find there.
"""

from __future__ import annotations

from typing import Any


class ChangesError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class ParseError(ChangesError):
    """A changelog that could not be parsed as a whole."""

    kind = "PARSE_FAILED"
    default_suggestion = "Check the changelog markup around the reported line."

    def __init__(
        self,
        reason: str,
        line: int,
        column: int,
        offset: int = 0,
        expected: list[str] | None = None,
        suggestion: str = "",
    ):
        self.reason = reason
        self.line = line
        self.column = column
        self.offset = offset
        self.expected = list(expected or [])
        super().__init__(
            code=self.kind,
            message=f"line {line}, column {column}: {reason}",
            suggestion=suggestion or self.default_suggestion,
            detail={
                "line": line,
                "column": column,
                "offset": offset,
                "expected": self.expected,
            },
        )


class UnrecognizedHeaderError(ParseError):
    kind = "UNRECOGNIZED_HEADER"
    default_suggestion = (
        "Start each release with a header such as '## 1.0.0 (2020-01-01)', "
        "'1.0.0 (2020-01-01):' or a version line underlined with '---'."
    )


class InconsistentBulletError(ParseError):
    kind = "INCONSISTENT_BULLET"
    default_suggestion = "Use the same bullet glyph ('*', '-' or '+') for every change in a section."

    def __init__(self, expected_glyph: str, found_glyph: str, line: int, column: int, offset: int = 0):
        self.expected_glyph = expected_glyph
        self.found_glyph = found_glyph
        super().__init__(
            f"expected bullet '{expected_glyph}', found '{found_glyph}'",
            line,
            column,
            offset,
            expected=[f"bullet '{expected_glyph}'"],
        )


class InconsistentDateSeparatorError(ParseError):
    kind = "INCONSISTENT_DATE_SEPARATOR"
    default_suggestion = "Write every date in the changelog with the same separator ('-' or '/')."

    def __init__(self, expected_sep: str, found_sep: str, line: int, column: int, offset: int = 0):
        self.expected_sep = expected_sep
        self.found_sep = found_sep
        super().__init__(
            f"expected date separator '{expected_sep}', found '{found_sep}'",
            line,
            column,
            offset,
            expected=[f"date separator '{expected_sep}'"],
        )


class UnexpectedEndOfInputError(ParseError):
    kind = "UNEXPECTED_END_OF_INPUT"
    default_suggestion = "The changelog ends in the middle of a construct; add the missing changes."


class UnexpectedInputError(ParseError):
    kind = "UNEXPECTED_INPUT"


class InputTooLargeError(ChangesError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            code="INPUT_TOO_LARGE",
            message=f"Input is {size} bytes, limit is {limit} bytes",
            suggestion="Split the changelog or raise CHANGES_MAX_INPUT_BYTES.",
        )
