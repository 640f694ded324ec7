"""Logging setup shared by all tools."""

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure a logger with console output and an optional log file.

    Args:
        name: Logger name (child loggers inherit its handlers)
        level: Log level name
        log_file: Append every message to this file when given

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(show_path=False, markup=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


class EventSink(Protocol):
    """Anything that can record a leveled event message."""

    def record(self, level: int, message: str) -> None:
        ...


class LoggerSink:
    """EventSink backed by a standard logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def record(self, level: int, message: str) -> None:
        self.logger.log(level, message)
