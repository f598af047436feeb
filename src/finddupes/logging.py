"""Console logging for finddupes."""

from __future__ import annotations

import logging


def configure_logging(verbose: bool = False, quiet: bool = False, timestamps: bool = False) -> logging.Logger:
    """Set up the finddupes logger with a single stream handler.

    verbose: DEBUG with level names. quiet: WARNING and above only.
    timestamps: prefix every message with [HH:MM:SS] (used with --show-progress).
    """
    if verbose:
        level, fmt = logging.DEBUG, "%(levelname)s: %(message)s"
    elif quiet:
        level, fmt = logging.WARNING, "%(levelname)s: %(message)s"
    else:
        level, fmt = logging.INFO, "%(message)s"
    if timestamps:
        fmt = "[%(asctime)s] " + fmt

    logger = logging.getLogger("finddupes")
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))
    logger.setLevel(level)
    logger.addHandler(handler)
    return logger
