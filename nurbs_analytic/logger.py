"""
Package logger configuration.
"""

import logging
import os


LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def setup_logger(name='nurbs_analytic', log_file=None, level=logging.WARNING):
    """
    Set up the package logger with a console handler and an optional file handler.

    Args:
        name: Logger name (child modules log under ``nurbs_analytic.<module>``)
        log_file: Optional path of a log file; its directory is created if needed
        level: Logging level for the logger and its handlers

    Returns:
        logging.Logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Calling twice must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
