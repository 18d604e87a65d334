"""Loguru configuration with a request-scoped correlation id."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_LINE_FORMAT = (
    "<green>{time:YYYY-MM-DDTHH:mm:ss.SSSZZ}</green> "
    "<lvl>{level:<7}</lvl> "
    "[<magenta>{extra[correlation_id]}</magenta>] "
    "<cyan>{name}:{line}</cyan> {message}"
)

# Third-party loggers that are noisy at DEBUG.
_QUIET_LOGGERS = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}

_request_id: ContextVar[str] = ContextVar("messagely_request_id", default="-")

_logger.configure(extra={"correlation_id": "-"})


class _StdlibBridge(logging.Handler):
    """Forward records from stdlib loggers into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.bind(correlation_id=_request_id.get()).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Attribute proxy that binds the current correlation id on every call."""

    def __getattr__(self, name: str) -> Any:
        return getattr(_logger.bind(correlation_id=_request_id.get()), name)


def set_correlation_id(value: str | None) -> None:
    _request_id.set(value or "-")


def get_correlation_id() -> str:
    return _request_id.get()


def clear_correlation_id() -> None:
    set_correlation_id(None)


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    sink_options: dict[str, Any] = {
        "level": level.upper(),
        "format": _LINE_FORMAT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }

    _logger.remove()
    _logger.add(sys.stderr, colorize=sys.stderr.isatty(), **sink_options)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _logger.add(
            log_file,
            colorize=False,
            enqueue=True,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
            **sink_options,
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
