from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from core.paths import get_logs_dir

ROOT_LOGGER_NAME = "squadscout"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogEmitter(QObject):
    log_message = Signal(str)


class QtSignalLogHandler(logging.Handler):
    """Forwards formatted records to the GUI; safe to call from scan worker threads."""

    def __init__(self, emitter: LogEmitter) -> None:
        super().__init__()
        self._emitter = emitter

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self._emitter.log_message.emit(message)
        except Exception:
            self.handleError(record)


def resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level_name: str = "INFO", logs_dir: Path | None = None) -> tuple[logging.Logger, LogEmitter]:
    log_file = (logs_dir or get_logs_dir()) / "app.log"
    level = resolve_level(level_name)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = RotatingFileHandler(
        filename=log_file,
        maxBytes=1_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    emitter = LogEmitter()
    signal_handler = QtSignalLogHandler(emitter)
    signal_handler.setFormatter(formatter)
    signal_handler.setLevel(max(level, logging.INFO))

    logger.addHandler(file_handler)
    logger.addHandler(signal_handler)

    # requests logs every connection through urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logger, emitter
