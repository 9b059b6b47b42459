"""
Intcode VM: Logging Setup

Console lines go through rich's RichHandler on stderr. An optional plain
file handler captures everything down to DEBUG, instruction traces
included.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import LOGGER_NAME, LOG_FORMAT, LOG_DATEFMT


def setup_logging(
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Configure and return the package logger.

    Calling it again replaces the handlers installed by a previous call,
    so the CLI (or a test) can change levels freely.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = console_level
    console = RichHandler(
        level=console_level,
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(fh)
        level = logging.DEBUG

    logger.setLevel(level)
    logger.propagate = False
    return logger
