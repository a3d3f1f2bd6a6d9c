"""
Logging setup for bazar.

Usage:
    from bazar.utils.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys
from functools import cache

from bazar.utils.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root_logger() -> None:
    root = logging.getLogger()

    # celery and pytest install their own handlers
    if root.handlers:
        return

    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
