"""Exceptions raised by the formatting pipeline.

Every failure is fatal: the tokenizer, parser and layout engine never
return partial results.  Callers catch :class:`SqlFormatError` to handle
all of them at once, or the specific subclass when the distinction
matters (e.g. to point an editor at the offending character).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from format_engine.lexer.token import Token


class SqlFormatError(Exception):
    """Base exception for all formatter errors."""


class ConfigurationError(SqlFormatError):
    """A dialect or render option was rejected before any text was processed."""


class LexError(SqlFormatError):
    """No token rule matches the input at ``position``.

    ``snippet`` holds at most 50 characters of the unconsumed remainder.
    """

    SNIPPET_LENGTH = 50

    def __init__(self, text: str, position: int) -> None:
        self.position = position
        self.line = text.count("\n", 0, position) + 1
        self.column = position - (text.rfind("\n", 0, position) + 1) + 1
        self.snippet = text[position : position + self.SNIPPET_LENGTH]
        super().__init__(
            f'Unexpected "{self.snippet}" at line {self.line}, column {self.column} '
            f"(offset {self.position})"
        )


class ParseError(SqlFormatError):
    """The token stream violates a structural expectation.

    ``token`` is the offending token (or the opening token of the
    construct that was never closed); ``position`` is its source offset.
    """

    def __init__(self, reason: str, token: Token) -> None:
        self.reason = reason
        self.token = token
        self.position = token.start
        super().__init__(f"{reason} at offset {token.start}")
