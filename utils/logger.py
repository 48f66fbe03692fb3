# -*- coding: utf-8 -*-
"""
Logging configuration.

All modules log through children of the ``kosadmin`` logger:

    from utils.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

ROOT_LOGGER_NAME = "kosadmin"

# Will be set by setup_logger
_logger: Optional[logging.Logger] = None


def setup_logger(log_to_file: Optional[bool] = None) -> logging.Logger:
    """
    Setup application logger with a rotating file handler and a console handler.

    Args:
        log_to_file: Override Config.LOG_TO_FILE (tests pass False)
    """
    global _logger

    # Import here to avoid circular imports
    from app.config import Config

    if log_to_file is None:
        log_to_file = Config.LOG_TO_FILE

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    if log_to_file:
        Config.LOGS_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            Config.LOG_PATH,
            maxBytes=Config.LOG_MAX_BYTES,
            backupCount=Config.LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter("%(levelname)-8s | %(name)s | %(message)s"))
    logger.addHandler(console_handler)

    _logger = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a module."""
    global _logger

    if _logger is None:
        _logger = setup_logger()

    return _logger.getChild(name)
