"""Profiling and structured logging."""

from __future__ import annotations

from format_engine.telemetry.json_formatter import JSONFormatter, configure_logging
from format_engine.telemetry.profiling import OperationStats, ProfileCollector, profile_operation

__all__ = [
    "JSONFormatter",
    "OperationStats",
    "ProfileCollector",
    "configure_logging",
    "profile_operation",
]
