"""Logging for the paramsign service and demo.

Handlers installed here are tagged with ``HANDLER_NAME``; calling
:func:`setup_logging` again replaces them instead of stacking duplicates.
Handlers added by the host application are left alone.
"""

import logging
import logging.handlers
import os
from typing import List, Optional

from paramsign.config import LOG_FILE, LOG_LEVEL

HANDLER_NAME = "paramsign"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 10 MB per file, 5 backups
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS
            )
        )
    return handlers


def remove_handlers(logger: Optional[logging.Logger] = None) -> int:
    """Detach and close the handlers paramsign installed; return how many."""
    logger = logger or logging.getLogger()
    removed = 0
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()
            removed += 1
    return removed


def setup_logging(
    log_level: str = LOG_LEVEL,
    log_file: Optional[str] = LOG_FILE,
    debug: bool = False,
) -> logging.Logger:
    """
    Configure the root logger for paramsign.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR); unknown names fall back to INFO
        log_file: Rotating log file path, or None for console only
        debug: Force DEBUG regardless of *log_level*

    Returns:
        The root logger
    """
    level_name = "DEBUG" if debug else log_level.upper()
    root = logging.getLogger()
    remove_handlers(root)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.getLogger(__name__).debug("Logging configured (level=%s, file=%s)", level_name, log_file)
    return root
