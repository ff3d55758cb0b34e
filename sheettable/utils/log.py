"""Package logger for sheettable.

Every module logs through ``get_logger("<module>")``; the shared
``sheettable`` logger writes to a rotating ``sheettable.log`` and to stderr.
Set ``SHEETTABLE_LOG_DIR`` to move the log file.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

LOG_DIR_ENV = "SHEETTABLE_LOG_DIR"
ROOT_LOGGER_NAME = "sheettable"
LOG_FILE_NAME = "sheettable.log"


def log_dir() -> Path:
    override = os.environ.get(LOG_DIR_ENV)
    return Path(override) if override else Path.home() / "SheetTable" / "logs"


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger

    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
    handlers = [
        logging.handlers.RotatingFileHandler(
            directory / LOG_FILE_NAME, maxBytes=1_000_000, backupCount=2, encoding="utf-8"
        ),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``sheettable.<name>`` child logger."""

    _package_logger()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_level(level: int) -> None:
    _package_logger().setLevel(level)
