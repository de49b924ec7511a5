"""Logging setup for the demos and command-line entry points."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"


class FindFontFilter(logging.Filter):
    """Drop matplotlib's font-manager chatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "findfont" not in record.getMessage() and not record.name.startswith(
            "matplotlib.font_manager"
        )


def setup_logging(level: str | int = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure the root logger once and return the package logger.

    Calling it again after handlers exist leaves the configuration alone.
    """
    root_logger = logging.getLogger()
    logger = logging.getLogger("network_tiles")
    if root_logger.handlers:
        return logger

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(FindFontFilter())
        root_logger.addHandler(handler)

    root_logger.setLevel(level)
    logging.getLogger("matplotlib").setLevel(max(level, logging.WARNING))
    return logger
