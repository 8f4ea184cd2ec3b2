"""Lexical token types.

The token model is the contract between the tokenizer and the parser.
It carries no dependency on regexes or dialect vocabulary.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(str, enum.Enum):
    """Closed enumeration of lexical classes."""

    BLOCK_COMMENT = "BLOCK_COMMENT"
    LINE_COMMENT = "LINE_COMMENT"
    COMMA = "COMMA"
    OPEN_PAREN = "OPEN_PAREN"
    CLOSE_PAREN = "CLOSE_PAREN"
    QUOTED_IDENTIFIER = "QUOTED_IDENTIFIER"
    NUMBER = "NUMBER"

    # Reserved words
    RESERVED_CASE_START = "RESERVED_CASE_START"
    RESERVED_CASE_END = "RESERVED_CASE_END"
    RESERVED_COMMAND = "RESERVED_COMMAND"
    RESERVED_BINARY_COMMAND = "RESERVED_BINARY_COMMAND"
    RESERVED_DEPENDENT_CLAUSE = "RESERVED_DEPENDENT_CLAUSE"
    RESERVED_JOIN = "RESERVED_JOIN"
    RESERVED_FUNCTION_NAME = "RESERVED_FUNCTION_NAME"
    RESERVED_KEYWORD = "RESERVED_KEYWORD"
    RESERVED_LOGICAL_OPERATOR = "RESERVED_LOGICAL_OPERATOR"
    RESERVED_JOIN_CONDITION = "RESERVED_JOIN_CONDITION"

    # Placeholders
    NAMED_PARAMETER = "NAMED_PARAMETER"
    QUOTED_PARAMETER = "QUOTED_PARAMETER"
    INDEXED_PARAMETER = "INDEXED_PARAMETER"
    POSITIONAL_PARAMETER = "POSITIONAL_PARAMETER"

    VARIABLE = "VARIABLE"
    STRING = "STRING"
    IDENTIFIER = "IDENTIFIER"
    DELIMITER = "DELIMITER"
    OPERATOR = "OPERATOR"

    @property
    def is_reserved(self) -> bool:
        return self.name.startswith("RESERVED_")

    @property
    def is_comment(self) -> bool:
        return self in (TokenType.BLOCK_COMMENT, TokenType.LINE_COMMENT)


#: Token types that start a clause node.
CLAUSE_START_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.RESERVED_COMMAND,
        TokenType.RESERVED_BINARY_COMMAND,
        TokenType.RESERVED_JOIN,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A classified lexical unit.

    ``text`` is the exact source slice; ``value`` is its normalized form
    (reserved words are uppercased with inner whitespace collapsed).
    ``key`` is only set for placeholder parameters.
    """

    type: TokenType
    text: str
    value: str
    whitespace_before: str = ""
    key: str | None = None
    start: int = 0

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    def is_keyword(self, value: str) -> bool:
        """True if this is a reserved word whose normalized value is *value*."""
        return self.type.is_reserved and self.value == value
