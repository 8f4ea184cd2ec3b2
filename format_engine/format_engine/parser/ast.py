"""Generic SQL syntax tree.

Every node is a frozen dataclass that owns its children and the tokens
delimiting it.  Together the nodes of a parse own every input token
exactly once; :func:`iter_tokens` walks them back out in source order.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Union

from format_engine.lexer.token import Token


class NodeKind(str, enum.Enum):
    """Closed set of node variants."""

    STATEMENT = "statement"
    CLAUSE = "clause"
    FUNCTION_CALL = "function_call"
    ARRAY_SUBSCRIPT = "array_subscript"
    PARENTHESIS = "parenthesis"
    BETWEEN_PREDICATE = "between_predicate"
    LIMIT_CLAUSE = "limit_clause"
    CASE_EXPRESSION = "case_expression"
    ALL_COLUMNS_ASTERISK = "all_columns_asterisk"
    TOKEN = "token"


@dataclass(frozen=True, slots=True)
class TokenNode:
    """Leaf for identifiers, literals, operators, comments and lone keywords."""

    kind: ClassVar[NodeKind] = NodeKind.TOKEN

    token: Token


@dataclass(frozen=True, slots=True)
class AllColumnsAsterisk:
    """An unqualified ``*``."""

    kind: ClassVar[NodeKind] = NodeKind.ALL_COLUMNS_ASTERISK

    token: Token


@dataclass(frozen=True, slots=True)
class Parenthesis:
    kind: ClassVar[NodeKind] = NodeKind.PARENTHESIS

    open_token: Token
    children: tuple[AstNode, ...]
    close_token: Token

    @property
    def open_paren(self) -> str:
        return self.open_token.text

    @property
    def close_paren(self) -> str:
        return self.close_token.text


@dataclass(frozen=True, slots=True)
class FunctionCall:
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_CALL

    name_token: Token
    parenthesis: Parenthesis


@dataclass(frozen=True, slots=True)
class ArraySubscript:
    kind: ClassVar[NodeKind] = NodeKind.ARRAY_SUBSCRIPT

    array_token: Token
    parenthesis: Parenthesis


@dataclass(frozen=True, slots=True)
class BetweenPredicate:
    """``BETWEEN <expr1> AND <expr2>``.

    Kept as one node so that its ``AND`` is never read as a logical
    operator.  The left operand stays a sibling in the enclosing sequence.
    """

    kind: ClassVar[NodeKind] = NodeKind.BETWEEN_PREDICATE

    between_token: Token
    expr1: tuple[AstNode, ...]
    and_token: Token
    expr2: tuple[AstNode, ...]


@dataclass(frozen=True, slots=True)
class LimitClause:
    """``LIMIT count`` or ``LIMIT offset, count``; ``offset`` is ``None`` for the former."""

    kind: ClassVar[NodeKind] = NodeKind.LIMIT_CLAUSE

    limit_token: Token
    count: tuple[AstNode, ...]
    offset: tuple[AstNode, ...] | None = None
    comma_token: Token | None = None


@dataclass(frozen=True, slots=True)
class Clause:
    """A reserved command (or WHEN/ELSE inside CASE) and the expressions it introduces."""

    kind: ClassVar[NodeKind] = NodeKind.CLAUSE

    name_token: Token
    children: tuple[AstNode, ...]


@dataclass(frozen=True, slots=True)
class CaseExpression:
    kind: ClassVar[NodeKind] = NodeKind.CASE_EXPRESSION

    case_token: Token
    operand: tuple[AstNode, ...]
    clauses: tuple[Clause, ...]
    end_token: Token


@dataclass(frozen=True, slots=True)
class Statement:
    kind: ClassVar[NodeKind] = NodeKind.STATEMENT

    children: tuple[AstNode, ...]
    has_semicolon: bool = False
    semicolon_token: Token | None = None


AstNode = Union[
    TokenNode,
    AllColumnsAsterisk,
    Parenthesis,
    FunctionCall,
    ArraySubscript,
    BetweenPredicate,
    LimitClause,
    Clause,
    CaseExpression,
]

Node = Union[AstNode, Statement]


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------


def child_nodes(node: Node) -> tuple[Node, ...]:
    """Direct child nodes of *node*, in source order."""
    if isinstance(node, (Statement, Clause, Parenthesis)):
        return node.children
    if isinstance(node, (FunctionCall, ArraySubscript)):
        return (node.parenthesis,)
    if isinstance(node, BetweenPredicate):
        return node.expr1 + node.expr2
    if isinstance(node, LimitClause):
        return (node.offset or ()) + node.count
    if isinstance(node, CaseExpression):
        return node.operand + node.clauses
    return ()


def walk(node: Node) -> Iterator[Node]:
    """Yield *node* and all of its descendants, pre-order."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(child_nodes(current)))


def iter_tokens(node: Node) -> Iterator[Token]:
    """Yield every token owned by *node* and its descendants, in source order."""
    if isinstance(node, (TokenNode, AllColumnsAsterisk)):
        yield node.token
    elif isinstance(node, Statement):
        for child in node.children:
            yield from iter_tokens(child)
        if node.semicolon_token is not None:
            yield node.semicolon_token
    elif isinstance(node, Clause):
        yield node.name_token
        for child in node.children:
            yield from iter_tokens(child)
    elif isinstance(node, Parenthesis):
        yield node.open_token
        for child in node.children:
            yield from iter_tokens(child)
        yield node.close_token
    elif isinstance(node, FunctionCall):
        yield node.name_token
        yield from iter_tokens(node.parenthesis)
    elif isinstance(node, ArraySubscript):
        yield node.array_token
        yield from iter_tokens(node.parenthesis)
    elif isinstance(node, BetweenPredicate):
        yield node.between_token
        for child in node.expr1:
            yield from iter_tokens(child)
        yield node.and_token
        for child in node.expr2:
            yield from iter_tokens(child)
    elif isinstance(node, LimitClause):
        yield node.limit_token
        for child in node.offset or ():
            yield from iter_tokens(child)
        if node.comma_token is not None:
            yield node.comma_token
        for child in node.count:
            yield from iter_tokens(child)
    elif isinstance(node, CaseExpression):
        yield node.case_token
        for child in node.operand:
            yield from iter_tokens(child)
        for clause in node.clauses:
            yield from iter_tokens(clause)
        yield node.end_token
