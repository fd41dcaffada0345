"""
Logger setup shared by the calculator modules.

Each named logger gets a single stdout handler the first time it is
requested; later calls hand back the same configured instance.
"""

import logging
import sys

from gpa_calculator import config


def get_logger(name: str = "gpa_calculator") -> logging.Logger:
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(config.LOG_LEVEL)

        formatter = logging.Formatter(fmt=config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        logger.propagate = False

    return logger
