"""
Logging setup for the putting simulator.

All modules log through children of the ``putting`` logger
(``putting.state``, ``putting.physics``, ...).
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "putting"


def setup_logging(level=logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'putting' logger.

    Args:
        level: Logging level, either an int (logging.DEBUG) or a name ("DEBUG").
        log_file: Optional path to also write the log to.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers when called again (e.g. a second game in one process)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
