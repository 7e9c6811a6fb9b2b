import logging
import sys

from artshop.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing `[NAME] message` lines to stdout.
    The handler is attached once per logger, so repeated imports are safe.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{name.upper()}] %(levelname)s %(message)s"))
        log.addHandler(h)
        log.propagate = False
    return log
