"""Dialect registry.

Usage::

    from format_engine.dialects import get_dialect

    tsql = get_dialect("tsql")

The registry is a read-only mapping built at import time, so it can be
shared freely between threads.
"""

from __future__ import annotations

from types import MappingProxyType

from format_engine.dialects import mysql, postgresql, sql, tsql
from format_engine.dialects.base import DialectConfig, IdentChars, StringType
from format_engine.errors import ConfigurationError

DEFAULT_DIALECT = "sql"

DIALECTS = MappingProxyType(
    {
        dialect.name: dialect
        for dialect in (sql.DIALECT, tsql.DIALECT, mysql.DIALECT, postgresql.DIALECT)
    }
)


def get_dialect(name: str) -> DialectConfig:
    """Return the dialect registered under *name* (case-insensitive).

    Raises
    ------
    ConfigurationError
        If no dialect has that name.
    """
    try:
        return DIALECTS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown dialect {name!r}; available: {', '.join(available_dialects())}"
        ) from None


def available_dialects() -> list[str]:
    """Registered dialect names, sorted."""
    return sorted(DIALECTS)


__all__ = [
    "DEFAULT_DIALECT",
    "DIALECTS",
    "DialectConfig",
    "IdentChars",
    "StringType",
    "available_dialects",
    "get_dialect",
]
