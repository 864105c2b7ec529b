"""Logging setup for confaudit.

Modules log through ``get_logger``; only the CLI installs a handler, so
library users keep full control over where records go.
"""

import logging
import sys
from typing import Any, TextIO

ROOT_LOGGER = "confaudit"

TEXT_FORMAT = "%(levelname)s: %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _quote(value: Any) -> str:
    text = str(value)
    return f'"{text}"' if " " in text or not text else text


class StructuredFormatter(logging.Formatter):
    """Formatter that appends a record's context fields as sorted ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if not fields:
            return message
        pairs = " ".join(f"{key}={_quote(value)}" for key, value in sorted(fields.items()))
        return f"{message} {pairs}"


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Install a single handler on the confaudit logger tree.

    Calling it again replaces the previous handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Timestamped lines with context fields appended
        stream: Destination stream, stderr by default

    Returns:
        The confaudit root logger
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter(STRUCTURED_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a confaudit module, e.g. ``get_logger("policy")``."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextLogger(logging.LoggerAdapter):
    """Adapter that attaches fixed context fields to every record.

    Fields passed per call through ``extra={"context": {...}}`` are merged
    over the fixed ones.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextLogger:
    """Get a module logger whose records carry ``context`` fields.

    Example:
        log = get_logger_with_context("downloader", source=url)
        log.info("Fetching bundle")
    """
    return ContextLogger(get_logger(name), context)
