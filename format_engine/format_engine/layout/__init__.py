"""Layout engine: statements to indented text."""

from format_engine.layout.formatter import Formatter
from format_engine.layout.writer import LineWriter

__all__ = ["Formatter", "LineWriter"]
