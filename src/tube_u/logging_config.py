"""Logging setup for the ``tube-u`` process.

Diagnostics go to stderr through Rich's ``RichHandler`` when Rich is
importable, or a plain ``StreamHandler`` otherwise.  Library modules
only ever call ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys

_PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-24s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt=_DATE_FORMAT))
        return handler

    handler = RichHandler(
        console=Console(stderr=True, highlight=False),
        show_path=False,
        rich_tracebacks=False,
        log_time_format=_DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``tube_u`` logger hierarchy and return it.

    ``WARNING`` by default, ``DEBUG`` when *verbose* is set.  Calling it
    again replaces the previously installed handler.
    """
    logger = logging.getLogger("tube_u")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if logger.hasHandlers():
        logger.handlers.clear()

    logger.addHandler(_build_handler())
    return logger
