"""
Tests for the RemoteCode error handling system.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import pytest

from remotecode.shared.errors import (
    ApplicationError,
    ArgumentError,
    CliError,
    ConfigError,
    ErrorCode,
    ErrorContext,
    RemoteCodeError,
    create_cli_error,
    create_cli_output_error,
    create_invalid_config_error,
    create_invalid_number_error,
    create_missing_value_error,
    create_restricted_option_error,
    create_unknown_option_error,
)


class Color(Enum):
    RED = "red"


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_coerces_path_and_enum(self):
        context = ErrorContext(additional_data={"path": Path("/etc/x"), "color": Color.RED, "count": 3})

        assert context.additional_data == {"path": str(Path("/etc/x")), "color": "red", "count": 3}

    def test_rejects_non_primitive_values(self):
        with pytest.raises(TypeError, match="Cannot coerce list"):
            ErrorContext(additional_data={"items": [1, 2]})

    def test_rejects_non_dict(self):
        with pytest.raises(TypeError, match="additional_data must be dict"):
            ErrorContext(additional_data=["a"])  # type: ignore[arg-type]

    def test_safe_dict(self):
        context = ErrorContext(file_path="/etc/x", operation="read")

        assert context.safe_dict() == {"file_path": "/etc/x", "operation": "read", "additional_data": {}}


class TestRemoteCodeError:
    """Test the base error class."""

    def test_str_is_message(self):
        error = RemoteCodeError(ErrorCode.UNKNOWN_OPTION, "Unknown option --bogus")

        assert str(error) == "Unknown option --bogus"

    def test_to_dict(self):
        cause = ValueError("bad")
        error = RemoteCodeError(
            ErrorCode.INVALID_NUMBER,
            "--port must be a number",
            ErrorContext(operation="parse_arguments"),
            cause,
        )

        assert error.to_dict() == {
            "code": "INVALID_NUMBER",
            "message": "--port must be a number",
            "context": {"operation": "parse_arguments", "additional_data": {}},
            "original_error": "bad",
        }

    def test_hierarchy(self):
        assert issubclass(ArgumentError, ApplicationError)
        assert issubclass(ConfigError, ApplicationError)
        assert issubclass(CliError, RemoteCodeError)


class TestFactories:
    """Test error factory functions."""

    def test_unknown_option(self):
        error = create_unknown_option_error("--bogus")

        assert isinstance(error, ArgumentError)
        assert error.context.additional_data == {"option": "--bogus"}

    def test_config_file_prefix(self):
        error = create_missing_value_error("bind-addr", "/etc/c.yaml")

        assert str(error) == "error reading /etc/c.yaml: --bind-addr requires a value"
        assert error.context.file_path == "/etc/c.yaml"

    def test_invalid_number_label(self):
        error = create_invalid_number_error("PORT", "x", label="$PORT")

        assert str(error) == "$PORT must be a number"
        assert error.context.additional_data == {"option": "PORT", "value": "x"}

    def test_restricted_option_ignores_config_file(self):
        error = create_restricted_option_error("password", "PASSWORD")

        assert str(error) == "--password can only be set in the config file or passed in via $PASSWORD"

    def test_invalid_config(self):
        error = create_invalid_config_error("invalid config: hello", "/etc/c.yaml")

        assert isinstance(error, ConfigError)
        assert error.code == ErrorCode.INVALID_CONFIG_DOCUMENT

    def test_cli_error(self):
        error = create_cli_error("boom", command="remotecode", exit_code=2)

        assert error.exit_code == 2
        assert error.command == "remotecode"
        assert error.code == ErrorCode.CLI_UNEXPECTED_ERROR
        assert error.context.additional_data == {"command": "remotecode"}

    def test_cli_output_error(self):
        error = create_cli_output_error("broken pipe", command="remotecode", output_type="json")

        assert error.code == ErrorCode.CLI_OUTPUT_ERROR
        assert error.context.additional_data == {"command": "remotecode", "output_type": "json"}
