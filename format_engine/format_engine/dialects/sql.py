"""Standard SQL (ANSI) vocabulary."""

from __future__ import annotations

from format_engine.dialects.base import DialectConfig, StringType

RESERVED_COMMANDS: tuple[str, ...] = (
    "ALTER COLUMN",
    "ALTER TABLE",
    "CALL",
    "CREATE TABLE",
    "CREATE VIEW",
    "DELETE FROM",
    "DROP TABLE",
    "DROP VIEW",
    "FETCH FIRST",
    "FETCH NEXT",
    "FROM",
    "GROUP BY",
    "HAVING",
    "INSERT INTO",
    "LIMIT",
    "MERGE INTO",
    "OFFSET",
    "ORDER BY",
    "PARTITION BY",
    "RETURNING",
    "SELECT",
    "SELECT DISTINCT",
    "SET",
    "TRUNCATE TABLE",
    "UPDATE",
    "VALUES",
    "WHERE",
    "WINDOW",
    "WITH",
    "WITH RECURSIVE",
)

RESERVED_BINARY_COMMANDS: tuple[str, ...] = (
    "INTERSECT",
    "INTERSECT ALL",
    "INTERSECT DISTINCT",
    "UNION",
    "UNION ALL",
    "UNION DISTINCT",
    "EXCEPT",
    "EXCEPT ALL",
    "EXCEPT DISTINCT",
)

RESERVED_JOINS: tuple[str, ...] = (
    "JOIN",
    "INNER JOIN",
    "LEFT JOIN",
    "LEFT OUTER JOIN",
    "RIGHT JOIN",
    "RIGHT OUTER JOIN",
    "FULL JOIN",
    "FULL OUTER JOIN",
    "CROSS JOIN",
    "NATURAL JOIN",
)

RESERVED_FUNCTION_NAMES: tuple[str, ...] = (
    "ABS",
    "AVG",
    "CAST",
    "CEIL",
    "CEILING",
    "CHAR_LENGTH",
    "COALESCE",
    "COUNT",
    "CURRENT_DATE",
    "CURRENT_TIMESTAMP",
    "EXTRACT",
    "FLOOR",
    "LOWER",
    "MAX",
    "MIN",
    "MOD",
    "NULLIF",
    "POSITION",
    "POWER",
    "RANK",
    "ROUND",
    "ROW_NUMBER",
    "SQRT",
    "SUBSTRING",
    "SUM",
    "TRIM",
    "UPPER",
)

RESERVED_KEYWORDS: tuple[str, ...] = (
    "ALL",
    "AS",
    "ASC",
    "BETWEEN",
    "BY",
    "CHECK",
    "CONSTRAINT",
    "CROSS",
    "DEFAULT",
    "DESC",
    "DISTINCT",
    "EXISTS",
    "FALSE",
    "FOREIGN KEY",
    "IN",
    "INTO",
    "IS",
    "KEY",
    "LIKE",
    "NOT",
    "NULL",
    "NULLS FIRST",
    "NULLS LAST",
    "ONLY",
    "OVER",
    "PRIMARY KEY",
    "REFERENCES",
    "ROWS",
    "TABLE",
    "THEN",
    "TRUE",
    "UNIQUE",
    "UNKNOWN",
    "VIEW",
)

DIALECT = DialectConfig(
    name="sql",
    reserved_commands=RESERVED_COMMANDS,
    reserved_binary_commands=RESERVED_BINARY_COMMANDS,
    reserved_joins=RESERVED_JOINS,
    reserved_keywords=RESERVED_KEYWORDS,
    reserved_function_names=RESERVED_FUNCTION_NAMES,
    string_types=(StringType(quote="''", prefixes=("X",)),),
    ident_types=('""',),
    positional_params=True,
    operators=("||",),
)
