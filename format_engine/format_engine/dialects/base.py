"""Dialect configuration model.

A dialect is a value, not a subclass: everything the generic tokenizer
and parser need to know about one SQL variant lives in a frozen
:class:`DialectConfig`.  Vocabulary lists are validated once, at
construction, so a bad dialect fails before any text is processed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

#: Quote styles understood by the regex rule table.
SUPPORTED_QUOTES: frozenset[str] = frozenset({"''", '""', "``", "[]", "$$"})


class StringType(BaseModel):
    """A string literal quote style with optional case-insensitive prefixes (``N'...'``)."""

    model_config = ConfigDict(frozen=True)

    quote: str
    prefixes: tuple[str, ...] = ()

    @field_validator("quote")
    @classmethod
    def _known_quote(cls, v: str) -> str:
        if v not in SUPPORTED_QUOTES:
            raise ValueError(f"Unsupported quote style {v!r}; expected one of {sorted(SUPPORTED_QUOTES)}")
        return v

    @field_validator("prefixes")
    @classmethod
    def _alpha_prefixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for prefix in v:
            if not prefix.isalpha():
                raise ValueError(f"String prefix must be alphabetic, got {prefix!r}")
        return v


class IdentChars(BaseModel):
    """Extra characters allowed in unquoted identifiers besides letters, digits and ``_``."""

    model_config = ConfigDict(frozen=True)

    first: str = ""
    rest: str = ""

    @field_validator("first", "rest")
    @classmethod
    def _no_whitespace(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("Identifier characters must not contain whitespace")
        return v


def _words(*defaults: str) -> tuple[str, ...]:
    return tuple(defaults)


class DialectConfig(BaseModel):
    """Immutable vocabulary and lexical conventions of one SQL dialect."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)

    reserved_commands: tuple[str, ...] = Field(
        description="Words that start a clause (SELECT, FROM, CREATE TABLE, ...).",
    )
    reserved_binary_commands: tuple[str, ...] = Field(
        default=(),
        description="Set operations that join two queries (UNION, EXCEPT, ...).",
    )
    reserved_joins: tuple[str, ...] = Field(default=())
    reserved_dependent_clauses: tuple[str, ...] = Field(default=_words("WHEN", "ELSE"))
    reserved_logical_operators: tuple[str, ...] = Field(default=_words("AND", "OR"))
    reserved_join_conditions: tuple[str, ...] = Field(default=_words("ON", "USING"))
    reserved_keywords: tuple[str, ...] = Field(default=())
    reserved_function_names: tuple[str, ...] = Field(default=())
    reserved_case_start: tuple[str, ...] = Field(default=_words("CASE"))
    reserved_case_end: tuple[str, ...] = Field(default=_words("END"))

    string_types: tuple[StringType, ...] = Field(default=(StringType(quote="''"),))
    ident_types: tuple[str, ...] = Field(default=('""',))
    ident_chars: IdentChars = Field(default_factory=IdentChars)

    named_param_types: tuple[str, ...] = Field(
        default=(),
        description="Prefixes of named parameters such as @name or :name.",
    )
    quoted_param_types: tuple[str, ...] = Field(
        default=(),
        description='Prefixes of quoted parameters such as @"name".',
    )
    indexed_param_types: tuple[str, ...] = Field(
        default=(),
        description="Prefixes of numbered parameters such as $1.",
    )
    positional_params: bool = False
    variable_types: tuple[str, ...] = Field(
        default=(),
        description="Prefixes of session/user variables such as @@ or @.",
    )

    operators: tuple[str, ...] = Field(
        default=(),
        description="Multi-character operators in addition to the generic ones.",
    )
    open_parens: tuple[str, ...] = Field(default=("(",))
    close_parens: tuple[str, ...] = Field(default=(")",))
    line_comment_types: tuple[str, ...] = Field(default=("--",))
    statement_delimiter: str = Field(default=";", min_length=1)

    # -- validation -----------------------------------------------------------

    @field_validator("reserved_commands")
    @classmethod
    def _has_commands(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("A dialect needs at least one reserved command")
        return v

    @field_validator(
        "reserved_commands",
        "reserved_binary_commands",
        "reserved_joins",
        "reserved_dependent_clauses",
        "reserved_logical_operators",
        "reserved_join_conditions",
        "reserved_keywords",
        "reserved_function_names",
        "reserved_case_start",
        "reserved_case_end",
    )
    @classmethod
    def _clean_words(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = []
        for word in v:
            stripped = " ".join(word.split())
            if not stripped:
                raise ValueError("Reserved word lists must not contain blank entries")
            cleaned.append(stripped)
        return tuple(cleaned)

    @field_validator("ident_types")
    @classmethod
    def _known_ident_quotes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for quote in v:
            if quote not in SUPPORTED_QUOTES:
                raise ValueError(f"Unsupported identifier quote style {quote!r}")
        return v

    @field_validator(
        "named_param_types",
        "quoted_param_types",
        "indexed_param_types",
        "variable_types",
        "operators",
        "line_comment_types",
    )
    @classmethod
    def _no_blank_symbols(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for symbol in v:
            if not symbol or any(ch.isspace() for ch in symbol):
                raise ValueError(f"Invalid symbol {symbol!r}")
        return v

    @model_validator(mode="after")
    def _paren_pairs(self) -> DialectConfig:
        if len(self.open_parens) != len(self.close_parens):
            raise ValueError("open_parens and close_parens must have the same length")
        markers = self.open_parens + self.close_parens
        if not self.open_parens:
            raise ValueError("At least one parenthesis pair is required")
        if any(len(marker) != 1 for marker in markers):
            raise ValueError("Parenthesis markers must be single characters")
        if len(set(markers)) != len(markers):
            raise ValueError("Parenthesis markers must be unique")
        return self

    # -- helpers --------------------------------------------------------------

    @property
    def paren_pairs(self) -> dict[str, str]:
        """Mapping of each open marker to its close marker."""
        return dict(zip(self.open_parens, self.close_parens))
