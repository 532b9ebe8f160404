"""Logging setup for the tasktree command line."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure and return the ``tasktree`` package logger.

    Safe to call repeatedly: later calls only adjust the level, so a
    ``--verbose`` flag takes effect even after an earlier default setup.
    """
    logger = logging.getLogger("tasktree")
    level = logging.DEBUG if verbose else logging.WARNING

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
