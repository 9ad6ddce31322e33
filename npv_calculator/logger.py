"""
Structured JSON Logging.

Every service receives a :class:`StructuredLogger` whose records are
rendered as one JSON object per line.  Console output goes to stderr so the
command-line JSON response on stdout stays machine-readable; a rotating log
file is added only when ``LOG_FILE`` is configured.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

from npv_calculator.config import get_config

_LogEntry = dict[str, Union[str, dict[str, str]]]


class JSONFormatter(logging.Formatter):
    """Formats log records as structured JSON objects.

    Keys: ``timestamp`` (ISO-8601, UTC), ``level``, ``logger_name``,
    ``message``, plus ``extra`` for fields passed via the ``extra`` kwarg and
    ``exception`` when a traceback is attached.
    """

    _RESERVED: frozenset[str] = frozenset(
        logging.LogRecord(
            name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
        ).__dict__
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        entry: _LogEntry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger_name": record.name,
            "message": record.getMessage(),
        }

        context = {k: str(v) for k, v in vars(record).items() if k not in self._RESERVED}
        if context:
            entry["extra"] = context

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            entry["exception"] = record.exc_text

        return json.dumps(entry, ensure_ascii=False)


def _console_handler(stream: Optional[TextIO], level: int) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def _rotating_file_handler(
    path: str,
    level: int,
    max_bytes: int,
    backup_count: int,
) -> logging.Handler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


class StructuredLogger:
    """Injectable wrapper around a named ``logging.Logger``.

    Unset arguments fall back to :class:`~npv_calculator.config.AppConfig`.
    Handlers are attached only the first time a name is seen, so building
    several services against the same logger name never duplicates output.

    Usage::

        log = StructuredLogger(name="npv_calculator.calculator")
        log.info("Starting NPV calculation for %d rates", 57)
    """

    def __init__(
        self,
        name: str = "npv_calculator",
        level: Optional[int] = None,
        stream: Optional[TextIO] = None,
        log_file: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        cfg = get_config()

        effective_level: int = cfg.log_level if level is None else level
        self._logger: logging.Logger = logging.getLogger(name)
        self._logger.setLevel(effective_level)

        if self._logger.handlers:
            return

        self._logger.addHandler(_console_handler(stream, effective_level))

        file_target: str = cfg.LOG_FILE if log_file is None else log_file
        if not file_target:
            return
        try:
            self._logger.addHandler(
                _rotating_file_handler(
                    file_target,
                    effective_level,
                    cfg.LOG_MAX_BYTES if max_bytes is None else max_bytes,
                    cfg.LOG_BACKUP_COUNT if backup_count is None else backup_count,
                )
            )
        except OSError as exc:
            self._logger.warning(
                "Could not open log file '%s' (%s); logging to console only",
                file_target, exc,
            )

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.error(msg, *args, **kwargs)


def get_logger(name: str = "npv_calculator") -> StructuredLogger:
    """Return a :class:`StructuredLogger` for *name* with configured defaults."""
    return StructuredLogger(name=name)
