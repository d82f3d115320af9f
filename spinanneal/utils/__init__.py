"""Utilities: logging setup."""

from .log import configure_logging, LOGGER_NAME

__all__ = ['configure_logging', 'LOGGER_NAME']
