"""Recursive-descent parser from a token stream to a generic SQL tree.

The parser walks an explicit cursor over the token list with at most one
token of look-ahead.  It never backtracks and never recovers: any
structural inconsistency raises :class:`~format_engine.errors.ParseError`.

Recursion happens only for parenthesis, CASE and BETWEEN nesting; its
depth is capped by ``max_depth`` so that adversarial input cannot exhaust
the interpreter stack.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from format_engine.errors import ParseError
from format_engine.lexer.token import CLAUSE_START_TYPES, Token, TokenType
from format_engine.parser.ast import (
    AllColumnsAsterisk,
    ArraySubscript,
    AstNode,
    BetweenPredicate,
    CaseExpression,
    Clause,
    FunctionCall,
    LimitClause,
    Parenthesis,
    Statement,
    TokenNode,
)
from format_engine.telemetry.profiling import profile_operation

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

# Tokens after which a "*" is an operator rather than "all columns".
_OPERAND_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.QUOTED_IDENTIFIER,
        TokenType.NUMBER,
        TokenType.STRING,
        TokenType.VARIABLE,
        TokenType.NAMED_PARAMETER,
        TokenType.QUOTED_PARAMETER,
        TokenType.INDEXED_PARAMETER,
        TokenType.POSITIONAL_PARAMETER,
        TokenType.CLOSE_PAREN,
        TokenType.RESERVED_CASE_END,
    }
)

_FUNCTION_NAME_TYPES = frozenset({TokenType.IDENTIFIER, TokenType.RESERVED_FUNCTION_NAME})
_ARRAY_NAME_TYPES = frozenset(
    {TokenType.IDENTIFIER, TokenType.QUOTED_IDENTIFIER, TokenType.RESERVED_KEYWORD}
)
_CASE_STOPS = frozenset({TokenType.RESERVED_DEPENDENT_CLAUSE, TokenType.RESERVED_CASE_END})
_NO_STOPS: frozenset[TokenType] = frozenset()


class _Cursor:
    """Read position over an owned token list."""

    __slots__ = ("tokens", "index")

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    def peek(self, offset: int = 0) -> Token | None:
        pos = self.index + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def previous_significant(self) -> Token | None:
        """The token before the cursor, skipping comments."""
        pos = self.index - 1
        while pos >= 0:
            token = self.tokens[pos]
            if not token.type.is_comment:
                return token
            pos -= 1
        return None


class Parser:
    """Builds :class:`Statement` trees from tokens.

    Parameters
    ----------
    paren_pairs:
        Mapping of open marker to close marker, e.g. ``{"(": ")", "[": "]"}``.
    max_depth:
        Maximum nesting of parenthesis and CASE expressions.
    """

    def __init__(
        self,
        paren_pairs: Mapping[str, str] | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._pairs = dict(paren_pairs) if paren_pairs is not None else {"(": ")"}
        self._max_depth = max_depth

    @profile_operation("sql.parse")
    def parse(self, tokens: Sequence[Token]) -> list[Statement]:
        """Split *tokens* into statements and parse each one.

        An empty token list yields an empty list.  A statement separator
        with nothing after it does not produce an empty trailing statement.
        """
        cursor = _Cursor(tokens)
        statements: list[Statement] = []

        while cursor.peek() is not None:
            children = self._parse_body(cursor, depth=0)
            token = cursor.peek()
            if token is None:
                statements.append(Statement(children=tuple(children), has_semicolon=False))
                break
            if token.type is TokenType.CLOSE_PAREN:
                raise ParseError(f"Unmatched closing {token.text!r}", token)
            separator = cursor.advance()
            statements.append(
                Statement(children=tuple(children), has_semicolon=True, semicolon_token=separator)
            )

        logger.debug("Parsed %d tokens into %d statements", len(tokens), len(statements))
        return statements

    # -- statement / parenthesis bodies ---------------------------------------

    def _parse_body(self, cursor: _Cursor, depth: int) -> list[AstNode]:
        """Leading expressions followed by clauses, up to a separator or closing marker."""
        nodes: list[AstNode] = self._parse_expressions(cursor, depth, _NO_STOPS)
        while (token := cursor.peek()) is not None and token.type in CLAUSE_START_TYPES:
            nodes.append(self._parse_clause(cursor, depth))
        return nodes

    def _parse_clause(self, cursor: _Cursor, depth: int) -> AstNode:
        name_token = cursor.advance()
        if name_token.type is TokenType.RESERVED_COMMAND and name_token.value == "LIMIT":
            return self._parse_limit(cursor, name_token, depth)
        children = self._parse_expressions(cursor, depth, _NO_STOPS)
        return Clause(name_token=name_token, children=tuple(children))

    def _parse_limit(self, cursor: _Cursor, limit_token: Token, depth: int) -> LimitClause:
        first = self._parse_expressions(cursor, depth, frozenset({TokenType.COMMA}))
        token = cursor.peek()
        if token is not None and token.type is TokenType.COMMA:
            comma = cursor.advance()
            if not first:
                raise ParseError("LIMIT clause is missing its offset before ','", comma)
            count = self._parse_expressions(cursor, depth, _NO_STOPS)
            if not count:
                raise ParseError("LIMIT clause is missing its count after ','", comma)
            return LimitClause(
                limit_token=limit_token,
                count=tuple(count),
                offset=tuple(first),
                comma_token=comma,
            )
        if not first:
            raise ParseError("LIMIT clause is missing its count", limit_token)
        return LimitClause(limit_token=limit_token, count=tuple(first))

    # -- expressions ----------------------------------------------------------

    def _is_terminator(self, token: Token, stops: frozenset[TokenType]) -> bool:
        return (
            token.type is TokenType.DELIMITER
            or token.type is TokenType.CLOSE_PAREN
            or token.type in CLAUSE_START_TYPES
            or token.type in stops
        )

    def _parse_expressions(
        self,
        cursor: _Cursor,
        depth: int,
        stops: frozenset[TokenType],
    ) -> list[AstNode]:
        nodes: list[AstNode] = []
        while (token := cursor.peek()) is not None and not self._is_terminator(token, stops):
            nodes.append(self._parse_node(cursor, depth, stops))
        return nodes

    def _parse_node(self, cursor: _Cursor, depth: int, stops: frozenset[TokenType]) -> AstNode:
        token = cursor.peek()
        assert token is not None

        if token.type is TokenType.OPEN_PAREN:
            return self._parse_parenthesis(cursor, depth)
        if token.type is TokenType.RESERVED_CASE_START:
            return self._parse_case(cursor, depth)
        if token.is_keyword("BETWEEN"):
            return self._parse_between(cursor, depth, stops)

        following = cursor.peek(1)
        if following is not None and following.type is TokenType.OPEN_PAREN:
            if following.text == "(" and token.type in _FUNCTION_NAME_TYPES:
                name_token = cursor.advance()
                return FunctionCall(name_token=name_token, parenthesis=self._parse_parenthesis(cursor, depth))
            if following.text == "[" and token.type in _ARRAY_NAME_TYPES:
                array_token = cursor.advance()
                return ArraySubscript(array_token=array_token, parenthesis=self._parse_parenthesis(cursor, depth))

        if token.type is TokenType.OPERATOR and token.value == "*" and not self._follows_operand(cursor):
            return AllColumnsAsterisk(token=cursor.advance())

        return TokenNode(token=cursor.advance())

    def _follows_operand(self, cursor: _Cursor) -> bool:
        previous = cursor.previous_significant()
        if previous is None:
            return False
        if previous.type is TokenType.OPERATOR:
            # "t.*" qualifies the asterisk.
            return previous.value == "."
        return previous.type in _OPERAND_TYPES

    def _check_depth(self, token: Token, depth: int) -> None:
        if depth >= self._max_depth:
            raise ParseError(f"Nesting deeper than {self._max_depth} levels", token)

    def _parse_parenthesis(self, cursor: _Cursor, depth: int) -> Parenthesis:
        open_token = cursor.advance()
        self._check_depth(open_token, depth)
        expected_close = self._pairs.get(open_token.text)
        if expected_close is None:
            raise ParseError(f"Unknown opening marker {open_token.text!r}", open_token)

        children = self._parse_body(cursor, depth + 1)

        token = cursor.peek()
        if token is None or token.type is not TokenType.CLOSE_PAREN:
            raise ParseError(f"Unclosed {open_token.text!r}", open_token)
        if token.text != expected_close:
            raise ParseError(
                f"Mismatched {token.text!r}: expected {expected_close!r} to close {open_token.text!r}",
                token,
            )
        close_token = cursor.advance()
        return Parenthesis(open_token=open_token, children=tuple(children), close_token=close_token)

    def _parse_case(self, cursor: _Cursor, depth: int) -> CaseExpression:
        case_token = cursor.advance()
        self._check_depth(case_token, depth)

        operand = self._parse_expressions(cursor, depth + 1, _CASE_STOPS)
        clauses: list[Clause] = []
        while (token := cursor.peek()) is not None and token.type is TokenType.RESERVED_DEPENDENT_CLAUSE:
            name_token = cursor.advance()
            children = self._parse_expressions(cursor, depth + 1, _CASE_STOPS)
            clauses.append(Clause(name_token=name_token, children=tuple(children)))

        token = cursor.peek()
        if token is None or token.type is not TokenType.RESERVED_CASE_END:
            raise ParseError(f"Unterminated {case_token.value} expression", case_token)
        end_token = cursor.advance()
        return CaseExpression(
            case_token=case_token,
            operand=tuple(operand),
            clauses=tuple(clauses),
            end_token=end_token,
        )

    def _parse_between(
        self,
        cursor: _Cursor,
        depth: int,
        stops: frozenset[TokenType],
    ) -> BetweenPredicate:
        between_token = cursor.advance()
        self._check_depth(between_token, depth)

        lower: list[AstNode] = []
        while True:
            token = cursor.peek()
            if token is None or self._is_terminator(token, stops):
                raise ParseError("BETWEEN without a matching AND", between_token)
            if token.type is TokenType.RESERVED_LOGICAL_OPERATOR and token.value == "AND":
                break
            lower.append(self._parse_node(cursor, depth + 1, stops))
        and_token = cursor.advance()
        if not lower:
            raise ParseError("BETWEEN is missing its lower bound", and_token)

        upper = self._parse_bound(cursor, depth + 1, stops, and_token)
        return BetweenPredicate(
            between_token=between_token,
            expr1=tuple(lower),
            and_token=and_token,
            expr2=tuple(upper),
        )

    def _parse_bound(
        self,
        cursor: _Cursor,
        depth: int,
        stops: frozenset[TokenType],
        and_token: Token,
    ) -> list[AstNode]:
        """One operand, optionally chained by operators: ``15``, ``x + 1``, ``t.col``."""
        nodes: list[AstNode] = []
        while True:
            token = cursor.peek()
            if token is None or self._is_terminator(token, stops):
                raise ParseError("BETWEEN ... AND is missing its upper bound", and_token)
            if token.type.is_comment or token.type is TokenType.OPERATOR:
                # Comments and prefix operators ("- 5") lead into the operand.
                nodes.append(TokenNode(token=cursor.advance()))
                continue
            nodes.append(self._parse_node(cursor, depth, stops))
            following = cursor.peek()
            if following is None or following.type is not TokenType.OPERATOR:
                return nodes
            nodes.append(TokenNode(token=cursor.advance()))
