"""
CLI Error Handling Utilities

This module maps exceptions raised while resolving the configuration to
CLI errors with exit codes, logs them, and writes them to the user either
as ``Error: <message>`` on stderr or as a JSON error document on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from pydantic import ValidationError

from remotecode.cli.json_formatter import error_document, write_document
from remotecode.shared.constants import CLIDefaults, CLIMessages
from remotecode.shared.errors import (
    ApplicationError,
    CliError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    RemoteCodeError,
    create_cli_error,
    create_cli_output_error,
)
from remotecode.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def _create_error_context(
    error: BaseException,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    """Create structured error context for logging."""
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _validation_message(error: ValidationError) -> str:
    """Describe the first failed field by its option name."""
    first = error.errors()[0]
    option = ".".join(str(part) for part in first["loc"])
    return f"--{option}: {first['msg']}" if option else first["msg"]


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    # Messages of our own errors are already phrased for the user
    if isinstance(error, RemoteCodeError):
        error_context["error_code"] = error.code.value
        return CliError(
            error.code,
            error.message,
            error.context,
            original_error=error,
            command=command,
            exit_code=CLIDefaults.EXIT_ERROR,
        )

    if isinstance(error, ValidationError):
        error_context["error_category"] = "validation"
        return create_cli_error(
            message=_validation_message(error),
            command=command,
            original_error=error,
        )

    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return CliError(
            ErrorCode.CLI_COMMAND_INTERRUPTED,
            "Command interrupted by user",
            ErrorContext(operation=command),
            command=command,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, (ApplicationError, ValidationError)):
        # Bad input; the message on stderr is enough
        logger.debug(
            "Rejected input in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, InfrastructureError):
        log_operation_error(logger, error, additional_context=error_context)
    else:
        logger.exception(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        _output_json_error(cli_error, error, command, error_context)
    else:
        sys.stderr.write(CLIMessages.ERROR_PREFIX.format(message=cli_error.message))


def _output_json_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> None:
    """Output error in JSON format."""
    try:
        write_document(error_document(cli_error, type(error).__name__))
    except (OSError, TypeError) as output_error:
        _handle_json_output_error(output_error, command, cli_error, error_context)


def _handle_json_output_error(
    output_error: Exception,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Handle JSON output error with fallback to stderr."""
    cli_output_error = create_cli_output_error(
        message=f"Failed to format JSON output: {output_error}",
        command=command,
        output_type="json",
        original_error=output_error,
    )
    logger.exception(
        "JSON output error: %s",
        cli_output_error.message,
        extra={"context": error_context},
    )
    sys.stderr.write(CLIMessages.ERROR_PREFIX.format(message=cli_error.message))
    sys.stderr.write(f"JSON output failed: {cli_output_error.message}\n")
