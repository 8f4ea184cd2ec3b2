"""Tokenizer engine: a priority-ordered scan over a regex rule table.

Token classes overlap (a quoted identifier also looks like an operator,
``LEFT JOIN`` also starts with an identifier), so the order in which
classes are tried is part of the contract.  It lives in
:data:`MATCH_ORDER` and nowhere else.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping

from format_engine.errors import LexError
from format_engine.lexer.rules import WHITESPACE_RE, TokenRule
from format_engine.lexer.token import Token, TokenType

logger = logging.getLogger(__name__)


class MatchKind(str, enum.Enum):
    """How a token class is matched."""

    PLAIN = "plain"
    # Skipped right after the member-access delimiter "." so that
    # ``mytable.from`` lexes ``from`` as an identifier.
    RESERVED = "reserved"
    # Also derives a placeholder key.
    PLACEHOLDER = "placeholder"


#: Matcher table, tried top to bottom at every scan position.
MATCH_ORDER: tuple[tuple[TokenType, MatchKind], ...] = (
    (TokenType.BLOCK_COMMENT, MatchKind.PLAIN),
    (TokenType.LINE_COMMENT, MatchKind.PLAIN),
    (TokenType.COMMA, MatchKind.PLAIN),
    (TokenType.OPEN_PAREN, MatchKind.PLAIN),
    (TokenType.CLOSE_PAREN, MatchKind.PLAIN),
    (TokenType.QUOTED_IDENTIFIER, MatchKind.PLAIN),
    (TokenType.NUMBER, MatchKind.PLAIN),
    (TokenType.RESERVED_CASE_START, MatchKind.RESERVED),
    (TokenType.RESERVED_CASE_END, MatchKind.RESERVED),
    (TokenType.RESERVED_COMMAND, MatchKind.RESERVED),
    (TokenType.RESERVED_BINARY_COMMAND, MatchKind.RESERVED),
    (TokenType.RESERVED_DEPENDENT_CLAUSE, MatchKind.RESERVED),
    (TokenType.RESERVED_JOIN, MatchKind.RESERVED),
    (TokenType.RESERVED_FUNCTION_NAME, MatchKind.RESERVED),
    (TokenType.RESERVED_KEYWORD, MatchKind.RESERVED),
    (TokenType.RESERVED_LOGICAL_OPERATOR, MatchKind.RESERVED),
    (TokenType.RESERVED_JOIN_CONDITION, MatchKind.RESERVED),
    (TokenType.NAMED_PARAMETER, MatchKind.PLACEHOLDER),
    (TokenType.QUOTED_PARAMETER, MatchKind.PLACEHOLDER),
    (TokenType.INDEXED_PARAMETER, MatchKind.PLACEHOLDER),
    (TokenType.POSITIONAL_PARAMETER, MatchKind.PLACEHOLDER),
    (TokenType.VARIABLE, MatchKind.PLAIN),
    (TokenType.STRING, MatchKind.PLAIN),
    (TokenType.IDENTIFIER, MatchKind.PLAIN),
    (TokenType.DELIMITER, MatchKind.PLAIN),
    (TokenType.OPERATOR, MatchKind.PLAIN),
)

MEMBER_ACCESS_DELIMITER = "."


class TokenizerEngine:
    """Scans text left to right against a rule table.

    The engine keeps no state between :meth:`tokenize` calls, so one
    instance can be shared by concurrent callers.
    """

    def __init__(self, rules: Mapping[TokenType, TokenRule]) -> None:
        missing = [token_type for token_type, _ in MATCH_ORDER if token_type not in rules]
        if missing:
            raise ValueError(f"No token rule for: {', '.join(t.value for t in missing)}")
        self._rules = dict(rules)

    def tokenize(self, text: str) -> list[Token]:
        """Break *text* into tokens.

        Raises
        ------
        LexError
            If no token class matches at some position.
        """
        tokens: list[Token] = []
        previous: Token | None = None
        pos = 0
        length = len(text)

        while pos < length:
            whitespace = WHITESPACE_RE.match(text, pos)
            whitespace_before = whitespace.group(0) if whitespace else ""
            pos += len(whitespace_before)
            if pos >= length:
                break

            token = self._next_token(text, pos, whitespace_before, previous)
            if token is None:
                raise LexError(text, pos)
            tokens.append(token)
            previous = token
            pos = token.end

        logger.debug("Tokenized %d characters into %d tokens", length, len(tokens))
        return tokens

    def _next_token(
        self,
        text: str,
        pos: int,
        whitespace_before: str,
        previous: Token | None,
    ) -> Token | None:
        after_member_access = (
            previous is not None
            and previous.type is TokenType.OPERATOR
            and previous.value == MEMBER_ACCESS_DELIMITER
        )

        for token_type, kind in MATCH_ORDER:
            if kind is MatchKind.RESERVED and after_member_access:
                continue
            rule = self._rules[token_type]
            matched = rule.match(text, pos)
            if matched is None:
                continue
            return Token(
                type=token_type,
                text=matched,
                value=rule.value(matched) if rule.value else matched,
                whitespace_before=whitespace_before,
                key=rule.key(matched) if kind is MatchKind.PLACEHOLDER and rule.key else None,
                start=pos,
            )
        return None
