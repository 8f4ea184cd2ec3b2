"""Shared fixtures for format_engine tests."""

from __future__ import annotations

import pytest

from format_engine.dialects.base import DialectConfig
from format_engine.lexer.tokenizer import Tokenizer
from format_engine.parser.ast import Statement
from format_engine.parser.parser import Parser
from format_engine.pipeline import reset_tokenizer_cache
from format_engine.telemetry.profiling import ProfileCollector

# Small vocabulary used by the parser tests, with square brackets as a
# second parenthesis pair so that array subscripts can be exercised.
PARSER_DIALECT = DialectConfig(
    name="parser-test",
    reserved_commands=("SELECT", "FROM", "WHERE", "LIMIT", "CREATE TABLE"),
    reserved_binary_commands=("UNION",),
    reserved_joins=("JOIN",),
    reserved_keywords=("BETWEEN", "LIKE"),
    reserved_function_names=("SQRT", "OFFSET"),
    open_parens=("(", "["),
    close_parens=(")", "]"),
)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Fresh profile collector and tokenizer cache for each test."""
    ProfileCollector.reset()
    reset_tokenizer_cache()
    yield
    ProfileCollector.reset()
    reset_tokenizer_cache()


@pytest.fixture(scope="session")
def parser_tokenizer() -> Tokenizer:
    return Tokenizer(PARSER_DIALECT)


@pytest.fixture
def parse(parser_tokenizer: Tokenizer):
    """Tokenize and parse with the parser-test vocabulary."""
    parser = Parser(PARSER_DIALECT.paren_pairs)

    def _parse(sql: str) -> list[Statement]:
        return parser.parse(parser_tokenizer.tokenize(sql))

    return _parse
