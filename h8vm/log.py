"""
H8VM - Logging setup

Library modules only create loggers (logging.getLogger(__name__)).
Applications call setup_logging() once to attach handlers and
close_logging() when done:
  console  rich.logging.RichHandler
  file     optional, plain text with the pipe-separated format
"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"


def setup_logging(
    name: str = "h8vm",
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure and return the package logger.

    Calling it again replaces the handlers instead of stacking them.
    """
    logger = close_logging(name)
    logger.setLevel(level)

    console = RichHandler(
        level=console_level,
        show_time=True,
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
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(fh)
        logger.debug("log file: %s", path)

    return logger


def close_logging(name: str = "h8vm") -> logging.Logger:
    """Detach and close every handler on the package logger."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    return logger
