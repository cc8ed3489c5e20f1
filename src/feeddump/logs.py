"""Logging setup for the command line.

Library modules only create loggers (``logging.getLogger(__name__)``);
the CLI calls `configure_logging` once to route them to stderr through
Rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "feeddump"


def configure_logging(level: str | int = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the ``feeddump`` logger.

    Calling it again replaces the previous handler instead of stacking.

    Example:
        >>> import logging
        >>> configure_logging("DEBUG").level == logging.DEBUG
        True
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
