"""format_engine -- dialect-configurable SQL formatter.

Pipeline: priority-ordered tokenizer -> recursive-descent parser ->
layout engine.
"""

from format_engine.config import FormatOptions, KeywordCase, Settings, load_settings
from format_engine.dialects import DialectConfig, available_dialects, get_dialect
from format_engine.errors import ConfigurationError, LexError, ParseError, SqlFormatError
from format_engine.pipeline import SqlFormatter, format_sql

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DialectConfig",
    "FormatOptions",
    "KeywordCase",
    "LexError",
    "ParseError",
    "Settings",
    "SqlFormatError",
    "SqlFormatter",
    "available_dialects",
    "format_sql",
    "get_dialect",
    "load_settings",
]
