"""Regex rule table.

Builds one :class:`TokenRule` per :class:`TokenType` from a
:class:`DialectConfig`.  Every regex is compiled once per tokenizer and
applied with ``pattern.match(text, pos)`` so it is anchored at the scan
position.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from format_engine.dialects.base import DialectConfig, StringType
from format_engine.lexer.token import TokenType

WHITESPACE_RE = re.compile(r"\s+")

# Generic operators every dialect understands.  Longer symbols come first.
_GENERIC_OPERATORS: tuple[str, ...] = ("<>", "<=", ">=", "!=", "==", "||")
_SINGLE_CHAR_OPERATORS = "+-*/%&|^~!<>=.:?@#"

# Body patterns per quote style.  Doubled quotes and backslash escapes
# stay inside the literal.
_QUOTE_PATTERNS: dict[str, str] = {
    "''": r"(?:'[^'\\]*(?:\\.[^'\\]*)*')+",
    '""': r'(?:"[^"\\]*(?:\\.[^"\\]*)*")+',
    "``": r"(?:`[^`]*`)+",
    "[]": r"(?:\[[^\]]*\])(?:\][^\]]*\])*",
    "$$": r"(?P<tag>\$\w*\$)[\s\S]*?(?P=tag)",
}


@dataclass(frozen=True, slots=True)
class TokenRule:
    """How to recognize one token class.

    ``value`` normalizes the matched text; ``key`` derives a placeholder
    key from it.  Both default to identity / absent.
    """

    regex: re.Pattern[str]
    value: Callable[[str], str] | None = None
    key: Callable[[str], str] | None = None

    def match(self, text: str, pos: int) -> str | None:
        m = self.regex.match(text, pos)
        if m is None or not m.group(0):
            return None
        return m.group(0)


# ---------------------------------------------------------------------------
# Value / key transforms
# ---------------------------------------------------------------------------


def canonical_keyword(text: str) -> str:
    """Uppercase a reserved word and collapse its inner whitespace."""
    return " ".join(text.upper().split())


def _prefix_stripper(prefixes: Iterable[str]) -> Callable[[str], str]:
    ordered = sorted(set(prefixes), key=len, reverse=True)

    def strip(text: str) -> str:
        for prefix in ordered:
            if text.startswith(prefix):
                return text[len(prefix) :]
        return text

    return strip


def _unquoting_stripper(prefixes: Iterable[str]) -> Callable[[str], str]:
    strip = _prefix_stripper(prefixes)

    def key(text: str) -> str:
        body = strip(text)
        close_quote = body[-1]
        return body[1:-1].replace(close_quote * 2, close_quote).replace(f"\\{close_quote}", close_quote)

    return key


# ---------------------------------------------------------------------------
# Regex builders
# ---------------------------------------------------------------------------


def _escape_class(chars: str) -> str:
    return "".join(re.escape(ch) for ch in chars)


def _word_end(ident_chars: str) -> str:
    extra = _escape_class(ident_chars)
    return rf"(?![\w{extra}])"


def _reserved_word_regex(words: Iterable[str], ident_rest: str) -> re.Pattern[str]:
    unique = sorted(set(words), key=lambda w: (-len(w), w))
    if not unique:
        return _never()
    alternatives = "|".join(r"\s+".join(re.escape(part) for part in word.split()) for word in unique)
    return re.compile(rf"(?:{alternatives}){_word_end(ident_rest)}", re.IGNORECASE)


def _quote_regex(quotes: Iterable[str]) -> str:
    return "|".join(f"(?:{_QUOTE_PATTERNS[q]})" for q in quotes)


def _string_regex(string_types: Iterable[StringType]) -> re.Pattern[str]:
    parts = []
    for string_type in string_types:
        body = _QUOTE_PATTERNS[string_type.quote]
        if string_type.prefixes:
            prefixes = "|".join(re.escape(p) for p in string_type.prefixes)
            parts.append(rf"(?:(?i:{prefixes}))?{body}")
        else:
            parts.append(body)
    if not parts:
        return _never()
    return re.compile("|".join(f"(?:{p})" for p in parts))


def _identifier_regex(dialect: DialectConfig) -> re.Pattern[str]:
    first = _escape_class(dialect.ident_chars.first)
    rest = _escape_class(dialect.ident_chars.rest)
    head = rf"(?:[^\W\d]|[{first}])" if first else r"[^\W\d]"
    return re.compile(rf"{head}[\w{rest}]*")


def _prefix_alternation(prefixes: Iterable[str]) -> str:
    return "|".join(re.escape(p) for p in sorted(set(prefixes), key=lambda p: (-len(p), p)))


def _operator_regex(extra: Iterable[str]) -> re.Pattern[str]:
    symbols = sorted(set(extra) | set(_GENERIC_OPERATORS), key=lambda s: (-len(s), s))
    alternatives = "|".join(re.escape(s) for s in symbols)
    return re.compile(rf"(?:{alternatives}|[{_escape_class(_SINGLE_CHAR_OPERATORS)}])")


def _never() -> re.Pattern[str]:
    return re.compile(r"(?!)")


# ---------------------------------------------------------------------------
# Public builder
# ---------------------------------------------------------------------------


def build_token_rules(dialect: DialectConfig) -> dict[TokenType, TokenRule]:
    """Compile the full rule table for *dialect*.

    Every :class:`TokenType` gets a rule; classes the dialect does not use
    get a pattern that never matches.
    """
    rest = dialect.ident_chars.rest
    ident_rest = _escape_class(rest)

    def reserved(words: Iterable[str]) -> TokenRule:
        return TokenRule(_reserved_word_regex(words, rest), value=canonical_keyword)

    line_comments = _prefix_alternation(dialect.line_comment_types)

    rules: dict[TokenType, TokenRule] = {
        TokenType.BLOCK_COMMENT: TokenRule(re.compile(r"/\*[\s\S]*?(?:\*/|\Z)")),
        TokenType.LINE_COMMENT: TokenRule(
            re.compile(rf"(?:{line_comments})[^\r\n]*") if line_comments else _never()
        ),
        TokenType.COMMA: TokenRule(re.compile(",")),
        TokenType.OPEN_PAREN: TokenRule(re.compile(f"[{_escape_class(''.join(dialect.open_parens))}]")),
        TokenType.CLOSE_PAREN: TokenRule(re.compile(f"[{_escape_class(''.join(dialect.close_parens))}]")),
        TokenType.QUOTED_IDENTIFIER: TokenRule(
            re.compile(_quote_regex(dialect.ident_types)) if dialect.ident_types else _never()
        ),
        TokenType.NUMBER: TokenRule(
            re.compile(
                r"(?:0x[0-9a-fA-F]+|0b[01]+|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)"
                rf"(?![\w{ident_rest}])"
            )
        ),
        TokenType.RESERVED_CASE_START: reserved(dialect.reserved_case_start),
        TokenType.RESERVED_CASE_END: reserved(dialect.reserved_case_end),
        TokenType.RESERVED_COMMAND: reserved(dialect.reserved_commands),
        TokenType.RESERVED_BINARY_COMMAND: reserved(dialect.reserved_binary_commands),
        TokenType.RESERVED_DEPENDENT_CLAUSE: reserved(dialect.reserved_dependent_clauses),
        TokenType.RESERVED_JOIN: reserved(dialect.reserved_joins),
        TokenType.RESERVED_FUNCTION_NAME: reserved(dialect.reserved_function_names),
        TokenType.RESERVED_KEYWORD: reserved(dialect.reserved_keywords),
        TokenType.RESERVED_LOGICAL_OPERATOR: reserved(dialect.reserved_logical_operators),
        TokenType.RESERVED_JOIN_CONDITION: reserved(dialect.reserved_join_conditions),
        TokenType.VARIABLE: TokenRule(
            re.compile(rf"(?:{_prefix_alternation(dialect.variable_types)})[\w{ident_rest}]+")
            if dialect.variable_types
            else _never()
        ),
        TokenType.STRING: TokenRule(_string_regex(dialect.string_types)),
        TokenType.IDENTIFIER: TokenRule(_identifier_regex(dialect)),
        TokenType.DELIMITER: TokenRule(re.compile(re.escape(dialect.statement_delimiter))),
        TokenType.OPERATOR: TokenRule(_operator_regex(dialect.operators)),
    }

    rules.update(_placeholder_rules(dialect))
    return rules


def _placeholder_rules(dialect: DialectConfig) -> dict[TokenType, TokenRule]:
    ident_rest = _escape_class(dialect.ident_chars.rest)
    rules: dict[TokenType, TokenRule] = {}

    if dialect.named_param_types:
        prefixes = _prefix_alternation(dialect.named_param_types)
        rules[TokenType.NAMED_PARAMETER] = TokenRule(
            re.compile(rf"(?:{prefixes})[\w{ident_rest}]+"),
            key=_prefix_stripper(dialect.named_param_types),
        )
    else:
        rules[TokenType.NAMED_PARAMETER] = TokenRule(_never())

    if dialect.quoted_param_types and dialect.ident_types:
        prefixes = _prefix_alternation(dialect.quoted_param_types)
        quotes = "|".join(
            f"(?:{_QUOTE_PATTERNS[q]})" for q in dialect.ident_types if q != "$$"
        )
        rules[TokenType.QUOTED_PARAMETER] = TokenRule(
            re.compile(rf"(?:{prefixes})(?:{quotes})"),
            key=_unquoting_stripper(dialect.quoted_param_types),
        )
    else:
        rules[TokenType.QUOTED_PARAMETER] = TokenRule(_never())

    if dialect.indexed_param_types:
        prefixes = _prefix_alternation(dialect.indexed_param_types)
        rules[TokenType.INDEXED_PARAMETER] = TokenRule(
            re.compile(rf"(?:{prefixes})[0-9]+"),
            key=_prefix_stripper(dialect.indexed_param_types),
        )
    else:
        rules[TokenType.INDEXED_PARAMETER] = TokenRule(_never())

    rules[TokenType.POSITIONAL_PARAMETER] = TokenRule(
        re.compile(r"\?") if dialect.positional_params else _never()
    )
    return rules
