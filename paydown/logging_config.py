"""Logging setup for the Paydown command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

__all__ = ["configure_logging", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_HANDLER_NAME = "paydown-cli"


def configure_logging(level: str = "WARNING", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach one stream handler to the ``paydown`` logger.

    Calling again replaces the previous handler instead of stacking a
    second one, so repeated CLI invocations in one process log once.

    Parameters
    ----------
    level : str
        "DEBUG", "INFO", "WARNING" or "ERROR".
    stream : file-like, optional
        Destination; defaults to stderr.
    """
    logger = logging.getLogger("paydown")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger
