"""Logging setup for the CLI. Library modules only call logging.getLogger."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "indexnow"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = "indexnow.log",
                  console: Console | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    logger.addHandler(RichHandler(console=console or Console(stderr=True), show_path=False))
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, "%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
    return logger
