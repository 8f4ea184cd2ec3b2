"""PostgreSQL vocabulary.

Square brackets are array subscripts here, so they are registered as a
parenthesis pair rather than an identifier quote.
"""

from __future__ import annotations

from format_engine.dialects.base import DialectConfig, IdentChars, StringType
from format_engine.dialects.sql import RESERVED_BINARY_COMMANDS as _SQL_BINARY_COMMANDS
from format_engine.dialects.sql import RESERVED_JOINS as _SQL_JOINS

RESERVED_COMMANDS: tuple[str, ...] = (
    "ALTER TABLE",
    "COPY",
    "CREATE FUNCTION",
    "CREATE INDEX",
    "CREATE MATERIALIZED VIEW",
    "CREATE SCHEMA",
    "CREATE TABLE",
    "CREATE VIEW",
    "DELETE FROM",
    "DO",
    "DROP INDEX",
    "DROP TABLE",
    "DROP VIEW",
    "EXPLAIN",
    "FETCH FIRST",
    "FETCH NEXT",
    "FROM",
    "GROUP BY",
    "HAVING",
    "INSERT INTO",
    "LIMIT",
    "OFFSET",
    "ON CONFLICT",
    "ORDER BY",
    "PARTITION BY",
    "REFRESH MATERIALIZED VIEW",
    "RETURNING",
    "SELECT",
    "SET",
    "TRUNCATE TABLE",
    "UPDATE",
    "VACUUM",
    "VALUES",
    "WHERE",
    "WINDOW",
    "WITH",
    "WITH RECURSIVE",
)

RESERVED_FUNCTION_NAMES: tuple[str, ...] = (
    "ABS",
    "ARRAY_AGG",
    "AVG",
    "CAST",
    "COALESCE",
    "CONCAT",
    "COUNT",
    "DATE_TRUNC",
    "EXTRACT",
    "GENERATE_SERIES",
    "GREATEST",
    "JSON_AGG",
    "JSONB_BUILD_OBJECT",
    "LEAST",
    "LENGTH",
    "LOWER",
    "MAX",
    "MIN",
    "NOW",
    "NULLIF",
    "ROUND",
    "ROW_NUMBER",
    "SQRT",
    "STRING_AGG",
    "SUBSTRING",
    "SUM",
    "TO_CHAR",
    "UNNEST",
    "UPPER",
)

RESERVED_KEYWORDS: tuple[str, ...] = (
    "ALL",
    "ANY",
    "ARRAY",
    "AS",
    "ASC",
    "BETWEEN",
    "BY",
    "DEFAULT",
    "DESC",
    "DISTINCT",
    "DISTINCT ON",
    "EXISTS",
    "FOREIGN KEY",
    "ILIKE",
    "IN",
    "INTERVAL",
    "INTO",
    "IS",
    "LATERAL",
    "LIKE",
    "NOT",
    "NOTHING",
    "NULL",
    "OVER",
    "PRIMARY KEY",
    "REFERENCES",
    "SERIAL",
    "SIMILAR TO",
    "THEN",
    "UNIQUE",
)

OPERATORS: tuple[str, ...] = (
    "::",
    "->>",
    "->",
    "#>>",
    "#>",
    "@>",
    "<@",
    "?|",
    "?&",
    "!~~*",
    "!~~",
    "~~*",
    "~~",
    "!~*",
    "!~",
    "~*",
    "&&",
    "<<",
    ">>",
)

DIALECT = DialectConfig(
    name="postgresql",
    reserved_commands=RESERVED_COMMANDS,
    reserved_binary_commands=_SQL_BINARY_COMMANDS,
    reserved_joins=_SQL_JOINS,
    reserved_keywords=RESERVED_KEYWORDS,
    reserved_function_names=RESERVED_FUNCTION_NAMES,
    string_types=(
        StringType(quote="''", prefixes=("E", "X", "B")),
        StringType(quote="$$"),
    ),
    ident_types=('""',),
    ident_chars=IdentChars(rest="$"),
    indexed_param_types=("$",),
    operators=OPERATORS,
    open_parens=("(", "["),
    close_parens=(")", "]"),
)
