"""Layout engine: renders parsed statements as indented SQL text.

Output depends only on the tree and the :class:`FormatOptions`; the
whitespace recorded on tokens is never consulted.  That is what makes
formatting idempotent: re-tokenizing and re-parsing the output yields
the same tree, which renders the same text.

Layout rules
------------
* Every clause starts a new line at the depth of its statement body.
  Its expressions follow on the same line when they fit; otherwise each
  comma-separated item gets its own line one level deeper.
* A parenthesis that does not fit on its line opens a block one level
  deeper and closes on its own line.  Subqueries always open a block.
* CASE puts each WHEN/ELSE on its own line one level deeper and END
  back at the CASE depth.
* A line comment always ends its line.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from format_engine.config import FormatOptions, KeywordCase
from format_engine.layout.writer import LineWriter
from format_engine.lexer.token import Token, TokenType
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

MEMBER_ACCESS = "."
CAST = "::"

_Group = tuple[list[AstNode], Optional[Token]]


def _is_token(node: AstNode | None, token_type: TokenType, value: str | None = None) -> bool:
    return (
        isinstance(node, TokenNode)
        and node.token.type is token_type
        and (value is None or node.token.value == value)
    )


def _split_groups(nodes: Sequence[AstNode]) -> list[_Group]:
    """Split *nodes* at top-level commas; each group keeps its trailing comma token."""
    groups: list[_Group] = []
    current: list[AstNode] = []
    for node in nodes:
        if isinstance(node, TokenNode) and node.token.type is TokenType.COMMA:
            groups.append((current, node.token))
            current = []
        else:
            current.append(node)
    if current:
        groups.append((current, None))
    return groups


class Formatter:
    """Renders statements according to :class:`FormatOptions`."""

    def __init__(self, options: FormatOptions | None = None) -> None:
        self.options = options or FormatOptions()

    @profile_operation("sql.layout")
    def format(self, statements: Sequence[Statement]) -> str:
        """Render *statements*, separated by ``lines_between_queries`` blank lines.

        The result carries no trailing newline.
        """
        separator = "\n" * (self.options.lines_between_queries + 1)
        output = separator.join(self.format_statement(statement) for statement in statements)
        logger.debug("Rendered %d statements into %d characters", len(statements), len(output))
        return output

    def format_statement(self, statement: Statement) -> str:
        out = LineWriter(self.options.indent, self.options.line_width)
        self._write_body(out, statement.children, depth=0)
        if statement.semicolon_token is not None:
            if out.ends_in_line_comment:
                out.newline(0)
            out.write(statement.semicolon_token.text, space=False)
        return out.getvalue()

    # -- keyword casing -------------------------------------------------------

    def show(self, token: Token) -> str:
        """Text emitted for *token*."""
        if not token.type.is_reserved:
            return token.text
        if self.options.keyword_case is KeywordCase.UPPER:
            return token.value
        if self.options.keyword_case is KeywordCase.LOWER:
            return token.value.lower()
        return " ".join(token.text.split())

    # -- single-line rendering ------------------------------------------------

    def _space_between(self, previous: AstNode | None, node: AstNode) -> bool:
        if previous is None:
            return True
        if _is_token(node, TokenType.COMMA):
            return False
        # "t.col" stays glued unless a number sits next to the dot.
        if _is_token(node, TokenType.OPERATOR, MEMBER_ACCESS):
            return _is_token(previous, TokenType.NUMBER)
        if _is_token(previous, TokenType.OPERATOR, MEMBER_ACCESS):
            return _is_token(node, TokenType.NUMBER)
        # "x::int" stays glued between two operands.
        if _is_token(node, TokenType.OPERATOR, CAST):
            return _is_token(previous, TokenType.OPERATOR)
        if _is_token(previous, TokenType.OPERATOR, CAST):
            return _is_token(node, TokenType.OPERATOR)
        # An open marker follows its preceding token directly, except after a comma.
        if isinstance(node, Parenthesis):
            return _is_token(previous, TokenType.COMMA)
        return True

    def _inline(self, node: AstNode) -> str | None:
        """*node* on one line, or None if it can never be written on one line."""
        if isinstance(node, TokenNode):
            if node.token.type is TokenType.LINE_COMMENT:
                return None
            return self.show(node.token)
        if isinstance(node, AllColumnsAsterisk):
            return node.token.text
        if isinstance(node, Parenthesis):
            if any(isinstance(child, (Clause, LimitClause)) for child in node.children):
                return None
            inner = self._inline_seq(node.children)
            if inner is None:
                return None
            return f"{node.open_paren}{inner}{node.close_paren}"
        if isinstance(node, (FunctionCall, ArraySubscript)):
            inner = self._inline(node.parenthesis)
            if inner is None:
                return None
            head = node.name_token if isinstance(node, FunctionCall) else node.array_token
            return self.show(head) + inner
        if isinstance(node, BetweenPredicate):
            lower = self._inline_seq(node.expr1)
            upper = self._inline_seq(node.expr2)
            if lower is None or upper is None:
                return None
            return f"{self.show(node.between_token)} {lower} {self.show(node.and_token)} {upper}"
        return None

    def _inline_seq(self, nodes: Sequence[AstNode]) -> str | None:
        parts: list[str] = []
        previous: AstNode | None = None
        for node in nodes:
            text = self._inline(node)
            if text is None:
                return None
            if parts and self._space_between(previous, node):
                parts.append(" ")
            parts.append(text)
            previous = node
        return "".join(parts)

    # -- block rendering ------------------------------------------------------

    def _write_body(self, out: LineWriter, nodes: Sequence[AstNode], depth: int) -> None:
        """Leading expressions, then one clause per line, all at *depth*."""
        leading: list[AstNode] = []
        for node in nodes:
            if isinstance(node, (Clause, LimitClause)):
                if leading:
                    self._write_list(out, leading, depth, space=False)
                    leading = []
                if isinstance(node, LimitClause):
                    self._write_limit(out, node, depth)
                else:
                    self._write_clause(out, node, depth)
            else:
                leading.append(node)
        if leading:
            self._write_list(out, leading, depth, space=False)

    def _write_clause(self, out: LineWriter, clause: Clause, depth: int) -> None:
        out.newline(depth)
        out.write(self.show(clause.name_token))
        if clause.children:
            self._write_list(out, clause.children, depth + 1, space=True)

    def _write_limit(self, out: LineWriter, limit: LimitClause, depth: int) -> None:
        out.newline(depth)
        out.write(self.show(limit.limit_token))
        if limit.offset is not None and limit.comma_token is not None:
            self._write_sequence(out, limit.offset, depth + 1, space=True)
            out.write(limit.comma_token.text, space=False)
        self._write_sequence(out, limit.count, depth + 1, space=True)

    def _write_list(self, out: LineWriter, nodes: Sequence[AstNode], depth: int, *, space: bool) -> None:
        """Comma-separated items on the current line if they fit, else one per line at *depth*."""
        text = self._inline_seq(nodes)
        if text is not None and out.fits(text, space=space):
            out.write(text, space=space)
            return
        for group, comma in _split_groups(nodes):
            out.newline(depth)
            self._write_sequence(out, group, depth, space=False)
            if comma is not None:
                out.write(comma.text, space=False)

    def _write_sequence(
        self,
        out: LineWriter,
        nodes: Sequence[AstNode],
        depth: int,
        *,
        space: bool,
    ) -> None:
        """Write *nodes* left to right, wrapping to *depth* when the next one does not fit."""
        previous: AstNode | None = None
        for index, node in enumerate(nodes):
            node_space = space if index == 0 else self._space_between(previous, node)
            self._write_node(out, node, depth, node_space)
            previous = node

    def _write_atom(self, out: LineWriter, text: str, depth: int, space: bool) -> None:
        if space and not out.at_line_start and not out.fits(text, space=space):
            out.newline(depth)
        out.write(text, space=space)

    def _write_node(self, out: LineWriter, node: AstNode, depth: int, space: bool) -> None:
        if isinstance(node, TokenNode) and node.token.type is TokenType.LINE_COMMENT:
            out.write_line_comment(node.token.text, space=space)
            return

        text = self._inline(node)
        if text is not None and out.fits(text, space=space):
            out.write(text, space=space)
            return

        if isinstance(node, Parenthesis):
            self._write_parenthesis(out, node, depth, space)
        elif isinstance(node, FunctionCall):
            self._write_atom(out, self.show(node.name_token), depth, space)
            self._write_parenthesis(out, node.parenthesis, depth, False)
        elif isinstance(node, ArraySubscript):
            self._write_atom(out, self.show(node.array_token), depth, space)
            self._write_parenthesis(out, node.parenthesis, depth, False)
        elif isinstance(node, BetweenPredicate):
            self._write_atom(out, self.show(node.between_token), depth, space)
            self._write_sequence(out, node.expr1, depth, space=True)
            self._write_atom(out, self.show(node.and_token), depth, True)
            self._write_sequence(out, node.expr2, depth, space=True)
        elif isinstance(node, CaseExpression):
            self._write_case(out, node, depth, space)
        elif text is not None:
            self._write_atom(out, text, depth, space)
        else:
            raise TypeError(f"Cannot lay out {type(node).__name__} inside an expression")

    def _write_parenthesis(self, out: LineWriter, paren: Parenthesis, depth: int, space: bool) -> None:
        out.write(paren.open_paren, space=space)
        if not paren.children:
            out.write(paren.close_paren, space=False)
            return
        if any(isinstance(child, (Clause, LimitClause)) for child in paren.children):
            self._write_body(out, paren.children, depth + 1)
        else:
            for group, comma in _split_groups(paren.children):
                out.newline(depth + 1)
                self._write_sequence(out, group, depth + 1, space=False)
                if comma is not None:
                    out.write(comma.text, space=False)
        out.newline(depth)
        out.write(paren.close_paren, space=False)

    def _write_case(self, out: LineWriter, case: CaseExpression, depth: int, space: bool) -> None:
        self._write_atom(out, self.show(case.case_token), depth, space)
        if case.operand:
            self._write_sequence(out, case.operand, depth + 1, space=True)
        for clause in case.clauses:
            out.newline(depth + 1)
            out.write(self.show(clause.name_token))
            self._write_sequence(out, clause.children, depth + 2, space=True)
        out.newline(depth)
        out.write(self.show(case.end_token))
