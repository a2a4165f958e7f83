# pactverify/logging.py
"""
Unified logging setup for pactverify.

All modules use:
    from pactverify.logging import get_logger
    logger = get_logger(__name__)

Configuration happens once, in the CLI entrypoint (or by the embedding
application). Library code never configures handlers.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"

# Below DEBUG; used for per-request wire dumps.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER_NAME = "pactverify"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=sys.stderr,
) -> None:
    """
    Configure the pactverify logging handler.

    Safe to call multiple times - handler duplication is prevented.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here - configuration happens in configure_logging().
    """
    return logging.getLogger(name)


@contextmanager
def scoped_level(level: Optional[int], name: str = ROOT_LOGGER_NAME) -> Iterator[None]:
    """Temporarily set the level of a logger, restoring the previous level on exit."""
    if level is None:
        yield
        return

    logger = logging.getLogger(name)
    previous = logger.level
    logger.setLevel(level)
    try:
        yield
    finally:
        logger.setLevel(previous)
