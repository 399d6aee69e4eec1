"""svgflags.logging_utils

Logging helpers for svgflags.

The library itself never writes log output: its modules log to named
loggers under "svgflags" (which carries a NullHandler) at DEBUG only, and
every failure is raised to the caller. Applications that want to see those
lines opt in with setup_logging().
"""

from __future__ import annotations

import logging
import os
import time
from typing import Optional


class _DefaultFieldsFilter(logging.Filter):
    """Ensure optional fields exist so formatters never KeyError."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Asset source label like "dir:/srv/flags", or "-" outside a source
        if not hasattr(record, "source"):
            record.source = "-"
        return True


def setup_logging(level: Optional[str] = None) -> None:
    """Configure process-wide console logging once.

    Args:
        level: Logging level name (e.g. 'INFO', 'DEBUG'). If omitted, uses
               SVGFLAGS_LOG_LEVEL env var, falling back to 'INFO'.
    """
    level_name = (level or os.getenv("SVGFLAGS_LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if getattr(root, "_svgflags_configured", False):
        return

    root.setLevel(numeric_level)

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-5s | %(name)s | %(source)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    formatter.converter = time.gmtime
    handler.setFormatter(formatter)
    handler.addFilter(_DefaultFieldsFilter())

    root.addHandler(handler)
    root._svgflags_configured = True  # type: ignore[attr-defined]

    # HTTP asset fetches are chatty at INFO/DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def source_label(kind: str, location: str | None = None) -> str:
    if location:
        return f"{kind}:{location}"
    return kind


class SourceLoggerAdapter(logging.LoggerAdapter):
    """Tag every line with the asset source it came from."""

    def __init__(self, logger: logging.Logger, kind: str, location: str | None = None):
        super().__init__(logger, {"source": source_label(kind, location)})

    @classmethod
    def for_source(cls, logger_name: str, kind: str, location: str | None = None) -> "SourceLoggerAdapter":
        return cls(logging.getLogger(logger_name), kind, location)
