"""Console logging for the ``taskboard`` logger tree.

Everything under ``taskboard.*`` goes to one stream handler; the level
comes from the argument, then ``LOG_LEVEL``, then INFO. Calling it again
replaces the handler rather than stacking a second one.
"""

import logging
import os
import sys
from typing import IO

LOGGER_NAME = "taskboard"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"
THIRD_PARTY = ("aiohttp", "aiohttp.access", "aiohttp.client", "asyncio", "PIL")


def resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str | int | None = None, stream: IO[str] | None = None) -> logging.Logger:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.propagate = False

    for name in THIRD_PARTY:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger
