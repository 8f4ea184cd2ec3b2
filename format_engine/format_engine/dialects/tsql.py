"""Transact-SQL (SQL Server) vocabulary.

Statement list follows the T-SQL statement reference; clause words used
inside queries are appended at the end.
"""

from __future__ import annotations

from format_engine.dialects.base import DialectConfig, IdentChars, StringType

RESERVED_COMMANDS: tuple[str, ...] = (
    "ADD SENSITIVITY CLASSIFICATION",
    "ADD SIGNATURE",
    "AGGREGATE",
    "ANSI_DEFAULTS",
    "ANSI_NULLS",
    "ANSI_NULL_DFLT_OFF",
    "ANSI_NULL_DFLT_ON",
    "ANSI_PADDING",
    "ANSI_WARNINGS",
    "APPLICATION ROLE",
    "ARITHABORT",
    "ARITHIGNORE",
    "ASSEMBLY",
    "ASYMMETRIC KEY",
    "AUTHORIZATION",
    "AVAILABILITY GROUP",
    "BACKUP",
    "BACKUP CERTIFICATE",
    "BACKUP MASTER KEY",
    "BACKUP SERVICE MASTER KEY",
    "BEGIN CONVERSATION TIMER",
    "BEGIN DIALOG CONVERSATION",
    "BROKER PRIORITY",
    "BULK INSERT",
    "CERTIFICATE",
    "CLOSE MASTER KEY",
    "CLOSE SYMMETRIC KEY",
    "COLLATE",
    "COLUMN ENCRYPTION KEY",
    "COLUMN MASTER KEY",
    "COLUMNSTORE INDEX",
    "CONCAT_NULL_YIELDS_NULL",
    "CONTEXT_INFO",
    "CONTRACT",
    "CREDENTIAL",
    "CRYPTOGRAPHIC PROVIDER",
    "CURSOR_CLOSE_ON_COMMIT",
    "DATABASE",
    "DATABASE AUDIT SPECIFICATION",
    "DATABASE ENCRYPTION KEY",
    "DATABASE HADR",
    "DATABASE SCOPED CONFIGURATION",
    "DATABASE SCOPED CREDENTIAL",
    "DATABASE SET",
    "DATEFIRST",
    "DATEFORMAT",
    "DEADLOCK_PRIORITY",
    "DELETE",
    "DELETE FROM",
    "DENY",
    "DENY XML",
    "DISABLE TRIGGER",
    "ENABLE TRIGGER",
    "END CONVERSATION",
    "ENDPOINT",
    "EVENT NOTIFICATION",
    "EVENT SESSION",
    "EXECUTE AS",
    "EXTERNAL DATA SOURCE",
    "EXTERNAL FILE FORMAT",
    "EXTERNAL LANGUAGE",
    "EXTERNAL LIBRARY",
    "EXTERNAL RESOURCE POOL",
    "EXTERNAL TABLE",
    "FIPS_FLAGGER",
    "FMTONLY",
    "FORCEPLAN",
    "FULLTEXT CATALOG",
    "FULLTEXT INDEX",
    "FULLTEXT STOPLIST",
    "GET CONVERSATION GROUP",
    "GET_TRANSMISSION_STATUS",
    "GRANT",
    "GRANT XML",
    "IDENTITY_INSERT",
    "IMPLICIT_TRANSACTIONS",
    "INSERT",
    "LOCK_TIMEOUT",
    "LOGIN",
    "MASTER KEY",
    "MERGE",
    "MESSAGE TYPE",
    "MOVE CONVERSATION",
    "NOCOUNT",
    "NOEXEC",
    "NUMERIC_ROUNDABORT",
    "OFFSETS",
    "OPEN MASTER KEY",
    "OPEN SYMMETRIC KEY",
    "PARSEONLY",
    "PARTITION FUNCTION",
    "PARTITION SCHEME",
    "QUERY_GOVERNOR_COST_LIMIT",
    "QUOTED_IDENTIFIER",
    "RECEIVE",
    "REMOTE SERVICE BINDING",
    "REMOTE_PROC_TRANSACTIONS",
    "RESOURCE GOVERNOR",
    "RESOURCE POOL",
    "RESTORE",
    "RESTORE FILELISTONLY",
    "RESTORE HEADERONLY",
    "RESTORE LABELONLY",
    "RESTORE MASTER KEY",
    "RESTORE REWINDONLY",
    "RESTORE SERVICE MASTER KEY",
    "RESTORE VERIFYONLY",
    "REVERT",
    "REVOKE",
    "REVOKE XML",
    "ROWCOUNT",
    "SEARCH PROPERTY LIST",
    "SECURITY POLICY",
    "SELECTIVE XML INDEX",
    "SEND",
    "SENSITIVITY CLASSIFICATION",
    "SERVER AUDIT",
    "SERVER AUDIT SPECIFICATION",
    "SERVER CONFIGURATION",
    "SERVER ROLE",
    "SERVICE MASTER KEY",
    "SET",
    "SETUSER",
    "SHOWPLAN_ALL",
    "SHOWPLAN_TEXT",
    "SHOWPLAN_XML",
    "SPATIAL INDEX",
    "STATISTICS IO",
    "STATISTICS PROFILE",
    "STATISTICS TIME",
    "STATISTICS XML",
    "SYMMETRIC KEY",
    "TABLE IDENTITY",
    "TEXTSIZE",
    "TRANSACTION ISOLATION LEVEL",
    "TRUNCATE TABLE",
    "UPDATE",
    "UPDATE STATISTICS",
    "WORKLOAD GROUP",
    "XACT_ABORT",
    "XML INDEX",
    "XML SCHEMA COLLECTION",
    # query clauses
    "ALTER COLUMN",
    "ALTER TABLE",
    "CREATE TABLE",
    "DROP TABLE",
    "FROM",
    "GROUP BY",
    "HAVING",
    "INSERT INTO",
    "LIMIT",
    "OFFSET",
    "ORDER BY",
    "PARTITION BY",
    "SELECT",
    "SET SCHEMA",
    "VALUES",
    "WHERE",
    "WINDOW",
    "WITH",
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
    "MINUS",
    "MINUS ALL",
    "MINUS DISTINCT",
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
    "CROSS APPLY",
    "OUTER APPLY",
)

RESERVED_FUNCTION_NAMES: tuple[str, ...] = (
    "ABS",
    "AVG",
    "CAST",
    "CEILING",
    "CHARINDEX",
    "COALESCE",
    "CONCAT",
    "CONVERT",
    "COUNT",
    "COUNT_BIG",
    "DATEADD",
    "DATEDIFF",
    "DATENAME",
    "DATEPART",
    "FLOOR",
    "GETDATE",
    "GETUTCDATE",
    "IIF",
    "ISNULL",
    "LEFT",
    "LEN",
    "LOWER",
    "LTRIM",
    "MAX",
    "MIN",
    "NEWID",
    "NULLIF",
    "OBJECT_ID",
    "RANK",
    "REPLACE",
    "RIGHT",
    "ROUND",
    "ROW_NUMBER",
    "RTRIM",
    "SCOPE_IDENTITY",
    "SQRT",
    "STRING_AGG",
    "SUBSTRING",
    "SUM",
    "TRY_CAST",
    "TRY_CONVERT",
    "UPPER",
)

RESERVED_KEYWORDS: tuple[str, ...] = (
    "ALL",
    "AS",
    "ASC",
    "BEGIN",
    "BETWEEN",
    "BY",
    "CLUSTERED",
    "CONSTRAINT",
    "DECLARE",
    "DEFAULT",
    "DESC",
    "DISTINCT",
    "EXEC",
    "EXECUTE",
    "EXISTS",
    "FOREIGN KEY",
    "IDENTITY",
    "IN",
    "INTO",
    "IS",
    "LIKE",
    "NOCHECK",
    "NOLOCK",
    "NONCLUSTERED",
    "NOT",
    "NULL",
    "OUTPUT",
    "OVER",
    "PERCENT",
    "PRIMARY KEY",
    "PROCEDURE",
    "REFERENCES",
    "RETURN",
    "ROWS",
    "TABLE",
    "THEN",
    "TIES",
    "TOP",
    "TRAN",
    "TRANSACTION",
    "UNIQUE",
    "VIEW",
)

OPERATORS: tuple[str, ...] = ("~", "!<", "!>", "+=", "-=", "*=", "/=", "%=", "|=", "&=", "^=", "::")

DIALECT = DialectConfig(
    name="tsql",
    reserved_commands=RESERVED_COMMANDS,
    reserved_binary_commands=RESERVED_BINARY_COMMANDS,
    reserved_joins=RESERVED_JOINS,
    reserved_keywords=RESERVED_KEYWORDS,
    reserved_function_names=RESERVED_FUNCTION_NAMES,
    string_types=(StringType(quote="''", prefixes=("N",)),),
    ident_types=('""', "[]"),
    ident_chars=IdentChars(first="#@", rest="#@$"),
    named_param_types=("@",),
    quoted_param_types=("@",),
    operators=OPERATORS,
)
