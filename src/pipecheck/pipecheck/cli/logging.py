# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Logging setup for the pipecheck command line."""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pipecheck"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_MAX_LOG_FILE_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 3


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    max_log_file_bytes: Optional[int] = None,
    log_backup_count: Optional[int] = None,
) -> logging.Logger:
    """Attach a stderr RichHandler (and optionally a rotating file) to the pipecheck logger."""
    level = level.upper()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=DEFAULT_MAX_LOG_FILE_BYTES if max_log_file_bytes is None else max_log_file_bytes,
            backupCount=DEFAULT_LOG_BACKUP_COUNT if log_backup_count is None else log_backup_count,
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        # The file keeps everything, the console only what was asked for.
        file_handler.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def log(message: str, level: str = "info") -> None:
    """Log *message* on the pipecheck CLI logger at the named level."""
    logging.getLogger(f"{LOGGER_NAME}.cli").log(logging.getLevelName(level.upper()), message)
