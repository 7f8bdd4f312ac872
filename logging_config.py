"""Process-wide logging for the monitor.

Modules log through ``logging.getLogger(__name__)`` and pass sensor context
with ``extra=``. Every such attribute is appended to the line as ``key=value``.
"""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Iterable, Optional

from settings import get_settings

_STANDARD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}

_configured = False


def record_context(record: logging.LogRecord) -> dict[str, object]:
    """Return the ``extra=`` attributes attached to ``record``, in call order."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRIBUTES and not key.startswith("_") and value is not None
    }


class ContextualFormatter(logging.Formatter):
    """Appends the record's context, optionally limited to ``extra_keys``."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys = frozenset(extra_keys) if extra_keys is not None else None

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = record_context(record)
        if self._extra_keys is not None:
            context = {key: value for key, value in context.items() if key in self._extra_keys}
        if not context:
            return message
        return message + " | " + " ".join(f"{key}={value}" for key, value in context.items())


def configure_logging(level: str | int | None = None) -> None:
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "sensor": {
                    "()": "logging_config.ContextualFormatter",
                    "fmt": "%(asctime)sZ %(levelname)-7s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": "sensor",
                }
            },
            # httpx logs every request at INFO; sensor polling would drown the output.
            "loggers": {"httpx": {"level": "WARNING"}},
            "root": {"handlers": ["console"], "level": log_level},
        }
    )
    _configured = True
