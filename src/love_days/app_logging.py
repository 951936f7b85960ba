"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Route ``love_days`` records to one stream handler at ``level``.

    Repeated calls only adjust the level, so building several apps in one
    process (as the test suite does) never duplicates output.
    """
    logger = logging.getLogger("love_days")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
