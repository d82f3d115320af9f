"""Logging setup for the spinanneal package."""

import logging
from typing import Union

LOGGER_NAME = 'spinanneal'
DEFAULT_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'


def configure_logging(level: Union[int, str] = logging.INFO,
                      fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling it again only updates the level and format, so repeated calls
    never duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers
                    if getattr(h, '_spinanneal_handler', False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._spinanneal_handler = True
        logger.addHandler(handler)

    handler.setFormatter(logging.Formatter(fmt))
    return logger
