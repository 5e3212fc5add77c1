"""Logging setup for the CLI and embedding applications."""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "synergy_bridge"
FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(
    level: Union[str, int] = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Attach handlers to the package logger.

    Console output goes to stderr through rich so it never mixes with
    report text on stdout. Calling this again replaces earlier handlers.

    Args:
        level: Log level name or number
        log_file: Optional file that also receives every record

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
