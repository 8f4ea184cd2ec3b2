"""Formatting pipeline: text -> tokens -> statements -> text.

Usage::

    from format_engine import format_sql

    print(format_sql("select a,b from t where x=1", dialect="sql"))

:class:`SqlFormatter` holds only immutable configuration and compiled
regexes, so one instance can serve many threads.  :func:`format_sql`
keeps one compiled tokenizer per dialect name behind a lock.
"""

from __future__ import annotations

import logging
import threading

from format_engine.config import FormatOptions
from format_engine.dialects import DEFAULT_DIALECT, get_dialect
from format_engine.dialects.base import DialectConfig
from format_engine.layout.formatter import Formatter
from format_engine.lexer.token import Token
from format_engine.lexer.tokenizer import Tokenizer
from format_engine.parser.ast import Statement
from format_engine.parser.parser import DEFAULT_MAX_DEPTH, Parser

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_tokenizers: dict[str, Tokenizer] = {}


def _cached_tokenizer(dialect: DialectConfig) -> Tokenizer:
    tokenizer = _tokenizers.get(dialect.name)
    if tokenizer is not None and tokenizer.dialect is dialect:
        return tokenizer

    with _lock:
        # Double-checked locking
        tokenizer = _tokenizers.get(dialect.name)
        if tokenizer is None or tokenizer.dialect is not dialect:
            tokenizer = Tokenizer(dialect)
            _tokenizers[dialect.name] = tokenizer
        return tokenizer


def reset_tokenizer_cache() -> None:
    """Drop compiled tokenizers.  **For testing only.**"""
    with _lock:
        _tokenizers.clear()


class SqlFormatter:
    """Formats SQL text for one dialect.

    Parameters
    ----------
    dialect:
        A registered dialect name or a :class:`DialectConfig`.
    options:
        Render configuration; defaults to :class:`FormatOptions()`.
    max_depth:
        Maximum nesting of parenthesis and CASE expressions.
    """

    def __init__(
        self,
        dialect: str | DialectConfig = DEFAULT_DIALECT,
        options: FormatOptions | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.dialect = get_dialect(dialect) if isinstance(dialect, str) else dialect
        self.options = options or FormatOptions()
        self._tokenizer = _cached_tokenizer(self.dialect)
        self._parser = Parser(self.dialect.paren_pairs, max_depth=max_depth)
        self._formatter = Formatter(self.options)

    def tokenize(self, sql: str) -> list[Token]:
        return self._tokenizer.tokenize(sql)

    def parse(self, sql: str) -> list[Statement]:
        """Tokenize and parse *sql* into statements."""
        return self._parser.parse(self.tokenize(sql))

    def format(self, sql: str) -> str:
        """Return *sql* re-laid out according to the options.

        Raises
        ------
        LexError
            If part of the input matches no token class.
        ParseError
            If the token stream is structurally inconsistent.
        """
        statements = self.parse(sql)
        output = self._formatter.format(statements)
        logger.debug("Formatted %d statements (dialect=%s)", len(statements), self.dialect.name)
        return output


def format_sql(
    sql: str,
    dialect: str | DialectConfig = DEFAULT_DIALECT,
    options: FormatOptions | None = None,
) -> str:
    """Format *sql* in one call.  See :class:`SqlFormatter`."""
    return SqlFormatter(dialect, options).format(sql)
