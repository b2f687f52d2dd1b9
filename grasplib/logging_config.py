"""
Logging Configuration
Sets up the loggers of the grasp generator packages.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGERS = ("grasplib", "grasp_models", "py.warnings")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the package loggers and routes warnings (e.g. angular sweeps
    hitting their iteration cap) through logging.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logging.captureWarnings(True)

    formatter = logging.Formatter(
        '[%(asctime)s] %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # avoid duplicate logs when called twice
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger("grasplib").debug("Logging initialized.")
