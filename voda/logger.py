"""Application-wide logging set up per phase."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any

from voda.domain.utils import getenv

LOGGER_NAME = "voda"

_LEVEL_COLORS = {
    logging.DEBUG: "\x1b[35m",
    logging.INFO: "\x1b[34m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[31m",
}
_LEVEL_NAMES = {logging.WARNING: "WARN", logging.CRITICAL: "FATAL"}


def _iso8601(created: float) -> str:
    moment = datetime.fromtimestamp(created).astimezone()
    millis = moment.microsecond // 1000
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{millis:03d}" + moment.strftime("%z")


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname)


def _fields(record: logging.LogRecord) -> dict[str, Any]:
    return dict(getattr(record, "fields", None) or {})


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": _level_name(record).lower(),
            "timestamp": _iso8601(record.created),
            "caller": f"{record.filename}:{record.lineno}",
            "msg": record.getMessage(),
        }
        entry.update(_fields(record))
        return json.dumps(entry, ensure_ascii=False, default=str)


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno, "")
        level = f"{color}{_level_name(record)}\x1b[0m" if color else _level_name(record)
        parts = [
            _iso8601(record.created),
            level,
            f"{record.filename}:{record.lineno}",
            record.getMessage(),
        ]
        fields = _fields(record)
        if fields:
            parts.append(json.dumps(fields, ensure_ascii=False, default=str))
        text = "\t".join(parts)
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at the time of each record."""

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)

    def flush(self) -> None:
        self.stream = sys.stderr
        super().flush()


def build_logger(phase: str) -> logging.Logger:
    """Configure the application logger: JSON at info level in prod, console at debug otherwise."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = _StderrHandler(sys.stderr)
    if phase == "prod":
        handler.setFormatter(_JsonFormatter())
        logger.setLevel(logging.INFO)
    else:
        handler.setFormatter(_ConsoleFormatter())
        logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


log = build_logger(getenv("PHASE", ""))


def info(message: str, **kwargs: Any) -> None:
    """Log ``message`` at info level with ``kwargs`` as structured fields."""
    log.info(message, extra={"fields": kwargs}, stacklevel=2)


def debug(message: str, **kwargs: Any) -> None:
    """Log ``message`` at debug level with ``kwargs`` as structured fields."""
    log.debug(message, extra={"fields": kwargs}, stacklevel=2)


def error(message: str, **kwargs: Any) -> None:
    """Log ``message`` at error level with ``kwargs`` as structured fields."""
    log.error(message, extra={"fields": kwargs}, stacklevel=2)