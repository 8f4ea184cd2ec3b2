"""JSON log formatter.

Emits each log record as a single-line JSON object so that log
aggregators can index formatter runs without regex parsing.  Activate by
setting ``SQLFMT_STRUCTURED_LOGGING=true``; :func:`configure_logging`
then replaces the root handlers with a ``StreamHandler`` using this
formatter.

Output schema per line::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "DEBUG",
        "logger": "format_engine.pipeline",
        "message": "Formatted 2 statements",
        "source": {"path": "query.sql"},   // present when passed via extra=
        "exc_info": "Traceback ..."         // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from format_engine.config import Settings


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Structured context passed via ``extra={"source": ...}``.
        source = getattr(record, "source", None)
        if source is not None:
            payload["source"] = source

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Install the root log handler according to *settings*.

    Structured mode writes JSON lines; otherwise a plain text format is
    used.  ``debug`` lowers the level to DEBUG.
    """
    level = logging.DEBUG if settings.debug else logging.WARNING
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    if settings.structured_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
