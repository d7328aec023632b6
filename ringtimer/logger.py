"""Logging setup.

Modules log through ``log`` (the ``ringtimer`` logger).  Handlers are
attached once, by the entry point, via :func:`configure_logging`, so
importing the package never touches the filesystem.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "ringtimer"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

log = logging.getLogger(LOGGER_NAME)


def configure_logging(
    level: int = logging.INFO,
    log_dir: Path | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
    console: bool = False,
) -> logging.Logger:
    """Attach the rotating file (and optional console) handler.

    Safe to call repeatedly; handlers are identified by name.
    """
    from .paths import LOGS_DIR

    log.propagate = False
    log.setLevel(level)

    log_dir = log_dir or LOGS_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    file_handler_name = f"{LOGGER_NAME}:file"
    if not any(h.get_name() == file_handler_name for h in log.handlers):
        file_handler = RotatingFileHandler(
            filename=log_dir / f"{LOGGER_NAME}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        file_handler.set_name(file_handler_name)
        log.addHandler(file_handler)

    console_handler_name = f"{LOGGER_NAME}:console"
    if console and not any(h.get_name() == console_handler_name for h in log.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(fmt)
        console_handler.set_name(console_handler_name)
        log.addHandler(console_handler)

    return log
