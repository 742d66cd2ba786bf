#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and a rotating file
handler (``junction.log``, 1 MB, 2 backups).

Call :func:`setup_logging` once at startup before the simulation starts
ticking.
"""

import logging
from logging.handlers import RotatingFileHandler

from config import LOG_FILE, WORLD_DEBUG_LOG_FILE


def setup_logging(level: int = logging.INFO, world_debug: bool = True) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    world_debug : bool
        Also write every ``world`` DEBUG record (per-tick agent dumps,
        spawns, reaps) to a dedicated rotating file.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)

    fh = RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=2)
    fh.setLevel(level)
    fh.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)
    root.addHandler(fh)

    # ── Dedicated debug file for the per-tick world dump ──────────────
    world_logger = logging.getLogger("world")
    world_logger.handlers.clear()
    if world_debug:
        world_logger.setLevel(logging.DEBUG)
        dfh = RotatingFileHandler(
            WORLD_DEBUG_LOG_FILE, maxBytes=5_000_000, backupCount=2
        )
        dfh.setLevel(logging.DEBUG)
        dfh.setFormatter(fmt)
        world_logger.addHandler(dfh)
