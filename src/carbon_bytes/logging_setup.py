"""Logging configuration used by the carbon-bytes command line."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

__all__ = ["JsonFormatter", "configure_logging"]

_RESERVED_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON with their ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS
        }
        payload: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "context": context,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: int | str = logging.WARNING, *, json_output: bool = False
) -> logging.Logger:
    """Attach a stderr handler to the ``carbon_bytes`` logger.

    Calling this again replaces the handler installed by a previous call.

    Args:
        level: Logging level or level name.
        json_output: Use :class:`JsonFormatter` instead of a plain text format.

    Returns:
        The configured package logger.
    """

    logger = logging.getLogger("carbon_bytes")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_carbon_bytes_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._carbon_bytes_handler = True  # type: ignore[attr-defined]
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    logger.addHandler(handler)
    return logger
