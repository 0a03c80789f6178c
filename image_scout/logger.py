# === FILE: image_scout/logger.py ===
"""Logging setup for ImageScout.

All crawler modules log to ``logging.getLogger(LOGGER_NAME)``. The CLI calls
:func:`init_logging` once with the level and optional log file from the
config; until then records go wherever the root logger sends them.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "ImageScout"
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _file_handler(file: Path | str) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )


def init_logging(
    level: Union[int, str] = "INFO", log_file: str | Path | None = None
) -> logging.Logger:
    """Send project logs to stdout (and *log_file*, rotated at 5 MiB), replacing old handlers."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(_file_handler(log_file))
    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        lg.addHandler(handler)

    lg.propagate = False
    return lg


__all__ = ["LOGGER_NAME", "LOG_FORMAT", "init_logging"]
