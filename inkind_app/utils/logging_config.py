# inkind_app/utils/logging_config.py

"""
Logging setup for the Flask application.

Handlers are attached to ``app.logger`` only; calling ``setup_logging`` again
(for example after tests change ``LOG_LEVEL``) replaces the handlers it added
earlier instead of stacking duplicates.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from flask.logging import default_handler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_NAME = "inkind_tracker.log"
LOG_FILE_MAX_BYTES = 5_000_000
LOG_FILE_BACKUP_COUNT = 5

_HANDLER_MARKER = "_inkind_handler"


def _resolve_level(value):
    level = logging.getLevelName(str(value or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _mark(handler):
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def setup_logging(app):
    """Configure ``app.logger`` from LOG_LEVEL, ENABLE_CONSOLE_LOGGING, ENABLE_FILE_LOGGING and LOG_DIR."""
    logger = app.logger
    level = _resolve_level(app.config.get("LOG_LEVEL", "INFO"))
    formatter = logging.Formatter(LOG_FORMAT)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()
    # Replaced by the console handler below.
    logger.removeHandler(default_handler)

    if app.config.get("ENABLE_CONSOLE_LOGGING", True):
        console_handler = _mark(logging.StreamHandler())
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if app.config.get("ENABLE_FILE_LOGGING", False):
        log_dir = app.config.get("LOG_DIR", "logs")
        os.makedirs(log_dir, exist_ok=True)
        file_handler = _mark(
            RotatingFileHandler(
                os.path.join(log_dir, LOG_FILE_NAME),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.debug("Logging configured at level %s", logging.getLevelName(level))
    return logger
