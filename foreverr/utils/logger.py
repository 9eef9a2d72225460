"""
Service logging. Everything goes to one stream handler on the "foreverr"
logger; APScheduler's own logger is attached to the same handler so the
daily job's misfires and errors show up next to ours.
"""

import logging
from typing import Optional

from foreverr.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ATTACHED_LOGGERS = ("apscheduler",)


def resolve_level(name: Optional[str] = None) -> int:
    return getattr(logging, (name or settings.log_level).upper(), logging.INFO)


def setup_logger(level: Optional[str] = None) -> logging.Logger:
    resolved = resolve_level(level)
    logger = logging.getLogger("foreverr")
    logger.setLevel(resolved)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # scheduler chatter stays at INFO or quieter even in DEBUG runs
    for name in ATTACHED_LOGGERS:
        attached = logging.getLogger(name)
        attached.setLevel(max(resolved, logging.INFO))
        attached.addHandler(handler)

    return logger


logger = setup_logger()
