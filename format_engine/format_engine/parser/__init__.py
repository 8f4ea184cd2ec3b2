"""Token stream to generic SQL tree."""

from format_engine.parser.ast import (
    AllColumnsAsterisk,
    ArraySubscript,
    AstNode,
    BetweenPredicate,
    CaseExpression,
    Clause,
    FunctionCall,
    LimitClause,
    Node,
    NodeKind,
    Parenthesis,
    Statement,
    TokenNode,
    child_nodes,
    iter_tokens,
    walk,
)
from format_engine.parser.parser import DEFAULT_MAX_DEPTH, Parser

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "AllColumnsAsterisk",
    "ArraySubscript",
    "AstNode",
    "BetweenPredicate",
    "CaseExpression",
    "Clause",
    "FunctionCall",
    "LimitClause",
    "Node",
    "NodeKind",
    "Parenthesis",
    "Parser",
    "Statement",
    "TokenNode",
    "child_nodes",
    "iter_tokens",
    "walk",
]
