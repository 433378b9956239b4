"""Structured JSON logger for drive2notion.

Each record becomes one JSON line on stderr.  A page replace, for example,
logs::

    {"ts": "2026-01-05T09:30:00.000000+00:00", "level": "INFO",
     "logger": "drive2notion.client", "message": "Page replaced",
     "op": "replace_page", "page_id": "abc123", "blocks_deleted": 12,
     "blocks": 40, "warnings": 1}

Usage::

    from drive2notion.observability import get_logger

    log = get_logger("drive2notion.client")
    log.info(
        "Page replaced",
        extra={"extra_fields": {"op": "replace_page", "page_id": "abc123"}},
    )

``op`` names the client or emitter operation (``create_page``,
``replace_page``, ``find_page``, ``emit``, ``request``) so one sync run can
be filtered per operation.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_RESERVED_KEYS = ("ts", "level", "logger", "message")


class StructuredFormatter(logging.Formatter):
    """Render a record as a single-line JSON object.

    ``extra_fields`` are merged at the top level, but never replace one of
    the four fixed keys (``ts``, ``level``, ``logger``, ``message``).
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = dict(getattr(record, "extra_fields", None) or {})
        entry.update(
            ts=datetime.now(timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        ordered = {key: entry.pop(key) for key in _RESERVED_KEYS}
        ordered.update(entry)
        return json.dumps(ordered, default=str)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


# get_logger attaches a handler only on the first call per name.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "drive2notion",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Return the JSON logger *name*, configuring it on first use.

    Parameters
    ----------
    name:
        Logger name.  Modules use ``"drive2notion.<module>"``.
    level:
        Minimum level as an ``int`` or a case-insensitive name.  Only
        applied on the first call for *name*.
    stream:
        Handler stream.  Defaults to ``sys.stderr``.

    Raises
    ------
    ValueError
        If *level* is a name :mod:`logging` does not know.
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    logger.setLevel(_resolve_level(level))
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    # records are already written here; the root logger must not repeat them
    logger.propagate = False
    _configured_loggers.add(name)
    return logger
