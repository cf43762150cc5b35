"""
Logging Configuration
Sets up the 'relviz' logger for the viewer and any script driving the core.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Send relviz log records to stdout and, optionally, to a file.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Path of a log file, overwritten on each run.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("relviz")
    logger.setLevel(level)

    # A restarted viewer reconfigures the same logger; drop the old handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized (level=%s, file=%s)",
                 logging.getLevelName(level), log_file or "-")
    return logger
