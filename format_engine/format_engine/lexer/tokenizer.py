"""Dialect-aware tokenizer: compiles a dialect's rule table once and reuses it."""

from __future__ import annotations

import logging

from format_engine.dialects.base import DialectConfig
from format_engine.lexer.engine import TokenizerEngine
from format_engine.lexer.rules import build_token_rules
from format_engine.lexer.token import Token
from format_engine.telemetry.profiling import profile_operation

logger = logging.getLogger(__name__)


class Tokenizer:
    """Tokenizes SQL text according to one :class:`DialectConfig`."""

    def __init__(self, dialect: DialectConfig) -> None:
        self.dialect = dialect
        self._engine = TokenizerEngine(build_token_rules(dialect))
        logger.debug("Compiled token rules for dialect %s", dialect.name)

    @profile_operation("sql.tokenize")
    def tokenize(self, text: str) -> list[Token]:
        """Return the token stream for *text*.

        Raises :class:`~format_engine.errors.LexError` when some part of
        the input matches no token class.
        """
        return self._engine.tokenize(text)
