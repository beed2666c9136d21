"""
Structured logging for RemoteCode.

This module configures the ``remotecode`` logger (rich console output plus
an optional JSON log file) and provides helpers to record errors with their
structured context.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from remotecode.shared.constants import LogConfig, LogLevels
from remotecode.shared.errors import ErrorContext, RemoteCodeError

logging.addLevelName(LogLevels.TRACE, "TRACE")

# Names accepted by the log option, mapped to logging levels.
LEVELS_BY_NAME: dict[str, int] = {
    "trace": LogLevels.TRACE,
    "debug": LogLevels.DEBUG,
    "info": LogLevels.INFO,
    "warn": LogLevels.WARNING,
    "error": LogLevels.ERROR,
}


class StructuredFormatter(logging.Formatter):
    """
    Formatter that renders each record as one JSON object.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Log record

        Returns:
            JSON-encoded log line
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "error_code"):
            log_entry["error_code"] = record.error_code

        if hasattr(record, "context"):
            log_entry["context"] = record.context

        if hasattr(record, "operation"):
            log_entry["operation"] = record.operation

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def _create_rich_console() -> Console:
    """
    Create the rich console used for log output (stderr, custom theme).

    Returns:
        Configured rich Console
    """
    custom_theme = Theme(
        {
            "logging.level.trace": "dim cyan",
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "log.time": "dim cyan",
            "log.message": "white",
            "log.path": "dim blue",
        }
    )
    return Console(theme=custom_theme, stderr=True)


def setup_structured_logger(
    name: str = LogConfig.LOGGER_NAME,
    level: str = "info",
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Configure a logger for structured output.

    Args:
        name: Logger name (default: "remotecode")
        level: One of trace, debug, info, warn, error
        log_file: Optional path of a JSON log file
        use_rich_console: Use rich console output instead of JSON on stderr

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    # Replace handlers installed by an earlier call
    if logger.handlers:
        logger.handlers.clear()

    log_level = LEVELS_BY_NAME[level]
    logger.setLevel(log_level)

    if use_rich_console:
        handler: logging.Handler = RichHandler(
            console=_create_rich_console(),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            log_time_format=LogConfig.TIME_FORMAT,
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)

    # File output is always JSON
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding=LogConfig.DEFAULT_ENCODING)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def apply_log_level(level: str, name: str = LogConfig.LOGGER_NAME) -> int:
    """
    Set the level of an already configured logger.

    Args:
        level: One of trace, debug, info, warn, error
        name: Logger name

    Returns:
        The numeric logging level that was applied
    """
    numeric = LEVELS_BY_NAME[level]
    logging.getLogger(name).setLevel(numeric)
    return numeric


def redact(values: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``values`` with secret entries masked."""
    return {
        key: (LogConfig.REDACTED_VALUE if key in LogConfig.REDACTED_KEYS else value)
        for key, value in values.items()
    }


def log_operation_error(
    logger: logging.Logger,
    error: RemoteCodeError,
    operation: str | None = None,
    additional_context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """
    Record a RemoteCodeError as a structured error log entry.

    Args:
        logger: Logger instance
        error: The error to record
        operation: Operation name; defaults to the error context's operation
        additional_context: Extra context merged over the error's own
    """
    context_dict: dict[str, Any] = dict(error.context.safe_dict())

    if additional_context:
        if isinstance(additional_context, ErrorContext):
            context_dict.update(additional_context.safe_dict())
        else:
            context_dict.update(additional_context)

    logger.error(
        error.message,
        extra={
            "error_code": error.code.name,
            "context": context_dict,
            "operation": operation or error.context.operation,
        },
        exc_info=error.original_error is not None,
    )
