"""MySQL / MariaDB vocabulary."""

from __future__ import annotations

from format_engine.dialects.base import DialectConfig, IdentChars, StringType
from format_engine.dialects.sql import RESERVED_BINARY_COMMANDS as _SQL_BINARY_COMMANDS

RESERVED_COMMANDS: tuple[str, ...] = (
    "ALTER TABLE",
    "CREATE DATABASE",
    "CREATE INDEX",
    "CREATE TABLE",
    "CREATE VIEW",
    "DELETE FROM",
    "DESCRIBE",
    "DROP DATABASE",
    "DROP INDEX",
    "DROP TABLE",
    "EXPLAIN",
    "FROM",
    "GROUP BY",
    "HAVING",
    "INSERT INTO",
    "INSERT IGNORE INTO",
    "LIMIT",
    "LOCK TABLES",
    "OFFSET",
    "ON DUPLICATE KEY UPDATE",
    "ORDER BY",
    "PARTITION BY",
    "REPLACE INTO",
    "SELECT",
    "SET",
    "SHOW",
    "TRUNCATE TABLE",
    "UNLOCK TABLES",
    "UPDATE",
    "USE",
    "VALUES",
    "WHERE",
    "WINDOW",
    "WITH",
)

RESERVED_JOINS: tuple[str, ...] = (
    "JOIN",
    "INNER JOIN",
    "LEFT JOIN",
    "LEFT OUTER JOIN",
    "RIGHT JOIN",
    "RIGHT OUTER JOIN",
    "CROSS JOIN",
    "NATURAL JOIN",
    "NATURAL LEFT JOIN",
    "NATURAL RIGHT JOIN",
    "STRAIGHT_JOIN",
)

RESERVED_FUNCTION_NAMES: tuple[str, ...] = (
    "ABS",
    "AVG",
    "CAST",
    "CEIL",
    "COALESCE",
    "CONCAT",
    "CONCAT_WS",
    "CONVERT",
    "COUNT",
    "DATE_ADD",
    "DATE_FORMAT",
    "DATE_SUB",
    "GROUP_CONCAT",
    "IF",
    "IFNULL",
    "JSON_EXTRACT",
    "LENGTH",
    "LOWER",
    "MAX",
    "MIN",
    "NOW",
    "NULLIF",
    "ROUND",
    "SQRT",
    "SUBSTRING",
    "SUM",
    "UPPER",
)

RESERVED_KEYWORDS: tuple[str, ...] = (
    "ALL",
    "AS",
    "ASC",
    "AUTO_INCREMENT",
    "BETWEEN",
    "BY",
    "CHARSET",
    "DEFAULT",
    "DESC",
    "DISTINCT",
    "ENGINE",
    "EXISTS",
    "FOREIGN KEY",
    "IN",
    "INTERVAL",
    "INTO",
    "IS",
    "KEY",
    "LIKE",
    "NOT",
    "NULL",
    "OVER",
    "PRIMARY KEY",
    "REFERENCES",
    "REGEXP",
    "THEN",
    "UNIQUE",
    "UNSIGNED",
)

DIALECT = DialectConfig(
    name="mysql",
    reserved_commands=RESERVED_COMMANDS,
    reserved_binary_commands=_SQL_BINARY_COMMANDS,
    reserved_joins=RESERVED_JOINS,
    reserved_logical_operators=("AND", "OR", "XOR"),
    reserved_keywords=RESERVED_KEYWORDS,
    reserved_function_names=RESERVED_FUNCTION_NAMES,
    string_types=(
        StringType(quote="''", prefixes=("N", "X", "B")),
        StringType(quote='""'),
    ),
    ident_types=("``",),
    ident_chars=IdentChars(rest="$"),
    positional_params=True,
    variable_types=("@@", "@"),
    operators=(":=", "<=>", "->>", "->", "&&", "<<", ">>"),
    line_comment_types=("--", "#"),
)
