"""RemoteCode Error Handling Module

This module defines the error handling system for RemoteCode, providing
structured error classes with context information and user-facing messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- User-facing Messages: str(error) is exactly the message shown to the user
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for RemoteCode.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Argument Errors
    UNKNOWN_OPTION = "UNKNOWN_OPTION"
    MISSING_VALUE = "MISSING_VALUE"
    INVALID_NUMBER = "INVALID_NUMBER"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    RESTRICTED_OPTION_SOURCE = "RESTRICTED_OPTION_SOURCE"
    MISSING_CERT_KEY = "MISSING_CERT_KEY"
    INVALID_BIND_ADDRESS = "INVALID_BIND_ADDRESS"

    # Configuration Errors
    INVALID_CONFIG_DOCUMENT = "INVALID_CONFIG_DOCUMENT"

    # Security Errors
    CERTIFICATE_GENERATION_FAILED = "CERTIFICATE_GENERATION_FAILED"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_COMMAND_INTERRUPTED = "CLI_COMMAND_INTERRUPTED"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path and Enum values to their primitive form.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so that contexts serialize safely into structured logs.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict for logging and error reporting.

        Returns:
            Dictionary with the set fields and a guaranteed additional_data key.
        """
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data or {}
        return data


class RemoteCodeError(Exception):
    """Base exception class for all RemoteCode errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize RemoteCodeError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        """Return the user-facing message."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ApplicationError(RemoteCodeError):
    """Application-level errors.

    These errors occur at the application layer, typically
    related to arguments, configuration, or application flow.
    """


class InfrastructureError(RemoteCodeError):
    """Infrastructure-related errors.

    These errors occur when interacting with external systems
    like the file system, sockets, or certificate tooling.
    """


class ArgumentError(ApplicationError):
    """Raised when an argument list cannot be tokenized.

    Examples:
    - Unknown option or short alias
    - Option that requires a value given none
    - Value that fails number or enum coercion
    - Password supplied on the command line
    """


class ConfigError(ApplicationError):
    """Raised when a config document cannot be turned into arguments."""


class CliError(ApplicationError):
    """CLI-specific error carrying the process exit code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def _argument_context(
    option: str,
    config_file: str | None,
    **extra: PrimitiveContextValue,
) -> ErrorContext:
    return ErrorContext(
        file_path=config_file,
        operation="parse_arguments",
        additional_data={"option": option, **extra},
    )


def _with_config_prefix(message: str, config_file: str | None) -> str:
    if config_file:
        return f"error reading {config_file}: {message}"
    return message


def create_unknown_option_error(option: str, config_file: str | None = None) -> ArgumentError:
    """Create an unknown option error for a flag or short alias."""
    return ArgumentError(
        ErrorCode.UNKNOWN_OPTION,
        _with_config_prefix(f"Unknown option {option}", config_file),
        _argument_context(option, config_file),
    )


def create_missing_value_error(name: str, config_file: str | None = None) -> ArgumentError:
    """Create an error for a non-boolean option given no value."""
    return ArgumentError(
        ErrorCode.MISSING_VALUE,
        _with_config_prefix(f"--{name} requires a value", config_file),
        _argument_context(name, config_file),
    )


def create_invalid_number_error(
    name: str,
    value: str,
    config_file: str | None = None,
    original_error: Exception | None = None,
    *,
    label: str | None = None,
) -> ArgumentError:
    """Create an error for a numeric option given a non-numeric value.

    ``label`` replaces the default ``--name`` when the value came from
    elsewhere, such as an environment variable.
    """
    return ArgumentError(
        ErrorCode.INVALID_NUMBER,
        _with_config_prefix(f"{label or '--' + name} must be a number", config_file),
        _argument_context(name, config_file, value=value),
        original_error,
    )


def create_invalid_enum_error(
    name: str,
    value: str,
    choices: list[str],
    config_file: str | None = None,
) -> ArgumentError:
    """Create an error listing the valid values of an enumerated option."""
    return ArgumentError(
        ErrorCode.INVALID_ENUM_VALUE,
        _with_config_prefix(f"--{name} valid values: [{', '.join(choices)}]", config_file),
        _argument_context(name, config_file, value=value),
    )


def create_restricted_option_error(name: str, env_var: str) -> ArgumentError:
    """Create an error for a secret passed on the command line."""
    return ArgumentError(
        ErrorCode.RESTRICTED_OPTION_SOURCE,
        f"--{name} can only be set in the config file or passed in via ${env_var}",
        _argument_context(name, None),
    )


def create_missing_cert_key_error(config_file: str | None = None) -> ArgumentError:
    """Create an error for a certificate requested without a key."""
    return ArgumentError(
        ErrorCode.MISSING_CERT_KEY,
        _with_config_prefix("--cert-key is missing", config_file),
        _argument_context("cert", config_file),
    )


def create_invalid_bind_address_error(
    bind_addr: str,
    original_error: Exception | None = None,
) -> ArgumentError:
    """Create an error for a bind address that is not host[:port]."""
    return ArgumentError(
        ErrorCode.INVALID_BIND_ADDRESS,
        f"invalid bind address: {bind_addr}",
        ErrorContext(operation="parse_bind_addr", additional_data={"bind_addr": bind_addr}),
        original_error,
    )


def create_invalid_config_error(
    message: str,
    config_file: str,
    original_error: Exception | None = None,
) -> ConfigError:
    """Create an error for a config document that is not a mapping."""
    return ConfigError(
        ErrorCode.INVALID_CONFIG_DOCUMENT,
        message,
        ErrorContext(file_path=config_file, operation="parse_config_file"),
        original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return CliError(
        ErrorCode.CLI_UNEXPECTED_ERROR,
        message,
        context,
        original_error,
        command,
        exit_code,
    )


def create_cli_output_error(
    message: str,
    command: str | None = None,
    output_type: str | None = None,
    original_error: Exception | None = None,
) -> CliError:
    """Create an error for output that could not be written."""
    additional_data: dict[str, PrimitiveContextValue] = {}
    if command:
        additional_data["command"] = command
    if output_type:
        additional_data["output_type"] = output_type
    return CliError(
        ErrorCode.CLI_OUTPUT_ERROR,
        message,
        ErrorContext(operation="write_output", additional_data=additional_data or None),
        original_error,
        command,
    )
