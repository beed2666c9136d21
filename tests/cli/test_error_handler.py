"""
Tests for CLI error handling utilities.

This module tests exception mapping, exit codes and the text and JSON
error output.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, Field, ValidationError

from remotecode.cli.error_handler import handle_cli_error
from remotecode.shared.errors import (
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_cli_error,
    create_unknown_option_error,
)


class PortModel(BaseModel):
    port: int = Field(le=65535)


def validation_error() -> ValidationError:
    try:
        PortModel(port=70000)
    except ValidationError as e:
        return e
    raise AssertionError("validation should fail")


class TestHandleCliError:
    """Test CLI error handling."""

    def test_cli_error_is_used_directly(self, capsys):
        cli_error = create_cli_error("Test CLI error", "remotecode", exit_code=3)

        assert handle_cli_error(cli_error, "remotecode") == 3
        assert capsys.readouterr().err == "Error: Test CLI error\n"

    def test_argument_error_keeps_message(self, capsys):
        assert handle_cli_error(create_unknown_option_error("--bogus"), "remotecode") == 1
        assert capsys.readouterr().err == "Error: Unknown option --bogus\n"

    def test_infrastructure_error(self, capsys):
        error = InfrastructureError(
            ErrorCode.CERTIFICATE_GENERATION_FAILED,
            "Failed to generate certificate for localhost: disk full",
            ErrorContext(operation="generate_certificate"),
        )

        assert handle_cli_error(error, "remotecode") == 1
        assert "Error: Failed to generate certificate for localhost: disk full" in capsys.readouterr().err

    def test_validation_error_names_option(self, capsys):
        assert handle_cli_error(validation_error(), "remotecode") == 1
        assert capsys.readouterr().err.startswith("Error: --port: Input should be less than or equal to 65535")

    def test_os_error(self, capsys):
        assert handle_cli_error(FileNotFoundError("missing.yaml"), "remotecode") == 1
        assert "Error: File system error: missing.yaml" in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys):
        assert handle_cli_error(KeyboardInterrupt(), "remotecode") == 130
        assert "Error: Command interrupted by user" in capsys.readouterr().err

    def test_unexpected_error(self, capsys):
        assert handle_cli_error(RuntimeError("boom"), "remotecode") == 1
        assert "Error: Unexpected error: boom" in capsys.readouterr().err


class TestJsonErrorOutput:
    """Test JSON error documents."""

    def test_json_document(self, capsys):
        exit_code = handle_cli_error(create_unknown_option_error("--bogus"), "remotecode", json_output=True)

        captured = capsys.readouterr()
        document = json.loads(captured.out)
        assert exit_code == 1
        assert captured.err == ""
        assert document["success"] is False
        assert document["command"] == "remotecode"
        assert document["error"]["message"] == "Unknown option --bogus"
        assert document["error"]["code"] == "UNKNOWN_OPTION"
        assert document["error"]["type"] == "ArgumentError"
        assert document["error"]["exit_code"] == 1
        assert document["error"]["context"]["additional_data"]["option"] == "--bogus"

    def test_output_failure_falls_back_to_stderr(self, capsys, mocker):
        mocker.patch("remotecode.cli.error_handler.write_document", side_effect=OSError("broken pipe"))

        handle_cli_error(create_unknown_option_error("--bogus"), "remotecode", json_output=True)

        err = capsys.readouterr().err
        assert "Error: Unknown option --bogus" in err
        assert "JSON output failed: Failed to format JSON output: broken pipe" in err
