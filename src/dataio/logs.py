"""
===========================================================
logs.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Shared logger factory for the data loaders. Progress messages
    go to stderr with a consistent format.

Notes:
    - Level is read from DATAIO_LOG_LEVEL (default INFO).
-----------------------------------------------------------
License: MIT
===========================================================
"""

from __future__ import annotations
import logging
import os
from functools import lru_cache

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level() -> int:
    level_name = os.getenv("DATAIO_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


@lru_cache(maxsize=None)
def get_logger(name: str) -> logging.Logger:
    """
    Return a configured logger; repeated calls reuse the same handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level())
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
