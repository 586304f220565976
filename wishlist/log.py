# wishlist/log.py
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name):
    """
    Return a named logger writing to stdout.

    The handler is attached once per logger name, so repeated imports do not
    duplicate output. Level is taken from LOG_LEVEL (default INFO).
    """
    logger = logging.getLogger(name)
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
