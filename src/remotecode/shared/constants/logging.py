"""
Logging Configuration Constants

This module contains all constants related to logging configuration,
log levels, and log formatting.
"""

import logging


class LogLevels:
    """Log level constants."""

    # Below DEBUG; registered with the logging module on import of shared.logging
    TRACE = 5
    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40


class LogConfig:
    """Log configuration constants."""

    LOGGER_NAME = "remotecode"
    DEFAULT_ENCODING = "utf-8"
    TIME_FORMAT = "[%H:%M:%S]"

    # Keys never written to logs
    REDACTED_KEYS = ("password", "hashed-password")
    REDACTED_VALUE = "<redacted>"
