"""Logging setup for changelog-gen."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "changelog_gen"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-scoped logger under the changelog_gen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Send changelog_gen log records to stderr through rich."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
