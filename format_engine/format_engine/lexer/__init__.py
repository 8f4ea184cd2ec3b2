"""Lexical analysis: token model, rule table and tokenizer engine."""

from format_engine.lexer.engine import MATCH_ORDER, MatchKind, TokenizerEngine
from format_engine.lexer.rules import TokenRule, build_token_rules, canonical_keyword
from format_engine.lexer.token import CLAUSE_START_TYPES, Token, TokenType
from format_engine.lexer.tokenizer import Tokenizer

__all__ = [
    "CLAUSE_START_TYPES",
    "MATCH_ORDER",
    "MatchKind",
    "Token",
    "TokenRule",
    "TokenType",
    "Tokenizer",
    "TokenizerEngine",
    "build_token_rules",
    "canonical_keyword",
]
