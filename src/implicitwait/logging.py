"""Routing of retry diagnostics emitted under the ``implicitwait`` logger."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from implicitwait.config import WaitSettings

LOGGER_NAME = "implicitwait"
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_level(level: str) -> int:
    return LOG_LEVELS.get(level.strip().upper(), py_logging.INFO)


def _file_handler(log_file: str | Path, formatter: py_logging.Formatter) -> py_logging.Handler | None:
    log_path = Path(log_file).expanduser().resolve()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = py_logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Attach fresh handlers to the package logger.

    Retry attempts are logged at DEBUG, so ``level="DEBUG"`` is what makes
    polling visible. Handlers installed by an earlier call are closed first.
    An unusable ``log_file`` is reported on the stream and otherwise ignored.
    """
    logger = py_logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    formatter = py_logging.Formatter(_FORMAT)

    stream_handler = py_logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = _file_handler(log_file, formatter)
        if file_handler is None:
            logger.warning("Log file unavailable, continuing without it: %s", log_file)
        else:
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def configure_from_settings(settings: WaitSettings, stream: TextIO | None = None) -> py_logging.Logger:
    return configure_logging(settings.log_level, stream, log_file=settings.log_file or None)
