"""Logging setup for the ``handlerchain`` logger namespace.

Modules log through ``logging.getLogger("handlerchain.<module>")``. Nothing is
emitted until the application configures logging, either its own way or via
``configure_logging()`` which applies ``LoggingSettings``.

Example:
    >>> from handlerchain.log import configure_logging
    >>> configure_logging()  # reads HANDLERCHAIN_LOG_LEVEL / HANDLERCHAIN_LOG_FORMAT
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

from .config import get_settings

if TYPE_CHECKING:
    from .config import HandlerChainSettings

ROOT_LOGGER = "handlerchain"

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """JSON Lines output: one object per record."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def configure_logging(
    settings: HandlerChainSettings | None = None,
    *,
    output: TextIO | None = None,
) -> logging.Logger:
    """Attach a handler to the package logger according to settings.

    Calling it again replaces the previously installed handler.

    Args:
        settings: Settings to apply (default: ``get_settings()``)
        output: Stream to write to (default: stderr)

    Returns:
        The configured ``handlerchain`` logger
    """
    settings = settings or get_settings()
    log = logging.getLogger(ROOT_LOGGER)

    for h in list(log.handlers):
        if getattr(h, "_handlerchain", False):
            log.removeHandler(h)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(JsonFormatter() if settings.logging.format == "json" else logging.Formatter(_TEXT_FORMAT))
    handler._handlerchain = True  # type: ignore[attr-defined]
    log.addHandler(handler)

    log.setLevel(logging.DEBUG if settings.debug else getattr(logging, settings.logging.level))
    return log
