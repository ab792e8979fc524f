from __future__ import annotations

import logging
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def init_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Initialize root logging configuration.

    Parameters
    ----------
    level: str
        Logging level name, e.g. "DEBUG", "INFO", "WARNING", "ERROR".
    log_file: Optional[str]
        If provided, logs will be written to this file in addition to the console.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger. Ensure logging is initialized upstream."""
    return logging.getLogger(name if name else __name__)
