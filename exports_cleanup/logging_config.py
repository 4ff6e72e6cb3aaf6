"""Logging configuration for exports-cleanup.

Log records go to stderr through a rich handler so they never mix with
report output on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "exports_cleanup"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure logging with a rich handler.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging

    Returns:
        The configured exports_cleanup logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the exports_cleanup namespace."""
    if name is None:
        return logging.getLogger(_ROOT_LOGGER)

    if not name.startswith(_ROOT_LOGGER):
        name = f"{_ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
