"""
Root logger setup.

stdout only: gunicorn / the container runtime capture it.
"""
import logging
import sys

from habitlog.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger()
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Idempotent: the app module may be imported more than once (tests, reload).
    if not any(getattr(h, "_habitlog", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._habitlog = True
        logger.addHandler(handler)
    return logger
