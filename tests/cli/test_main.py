"""
Tests for the CLI entry point.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from remotecode.cli.main import render_help, run


def read_json(out: str) -> dict:
    return json.loads(out)


class TestHelpAndVersion:
    """Test --help and --version."""

    def test_help(self, environ, capsys):
        assert run(["--help"], environ) == 0

        out = capsys.readouterr().out
        assert out.startswith("Usage: remotecode [options] [path]")
        assert "--bind-addr" in out
        assert "[password, none]" in out

    def test_help_wins_over_other_options(self, environ, capsys, mocker):
        read_config = mocker.patch("remotecode.cli.main.read_config_file")

        assert run(["-h", "--bind-addr", "0.0.0.0"], environ) == 0
        read_config.assert_not_called()

    def test_render_help_indents_every_line(self):
        lines = render_help().split("\n")

        assert lines[0] == "Usage: remotecode [options] [path]"
        assert all(line.startswith("  ") for line in lines[3:])

    def test_version(self, environ, capsys):
        assert run(["--version"], environ) == 0

        assert capsys.readouterr().out.strip() == "0.1.0"

    def test_version_json(self, environ, capsys):
        assert run(["-v", "--json"], environ) == 0

        document = read_json(capsys.readouterr().out)
        assert document["success"] is True
        assert document["command"] == "version"
        assert document["data"] == {"version": "0.1.0"}


class TestResolve:
    """Test printing the resolved configuration."""

    def test_first_launch_writes_config(self, environ, tmp_path: Path, capsys):
        assert run(["--json"], environ) == 0

        document = read_json(capsys.readouterr().out)
        data = document["data"]
        assert data["host"] == "127.0.0.1"
        assert data["port"] == 8080
        assert data["auth"] == "password"
        assert data["password"] == "<redacted>"
        assert data["config"] == str(tmp_path / "config" / "remotecode" / "config.yaml")
        assert (tmp_path / "config" / "remotecode" / "config.yaml").is_file()

    def test_command_line_overrides_config_file(self, environ, write_config, capsys):
        path = write_config("bind-addr: 127.0.0.1:8080\nauth: password\n")

        assert run(["--json", "--config", str(path), "--bind-addr=0.0.0.0:9000", "--auth=none"], environ) == 0

        data = read_json(capsys.readouterr().out)["data"]
        assert (data["host"], data["port"], data["auth"]) == ("0.0.0.0", 9000, "none")

    def test_environment_secrets_are_consumed(self, environ, write_config, capsys):
        path = write_config("auth: password\n")
        environ.update({"REMOTECODE_CONFIG": str(path), "PASSWORD": "from-env"})

        assert run(["--json"], environ) == 0

        data = read_json(capsys.readouterr().out)["data"]
        assert data["password"] == "<redacted>"
        assert data["using-env-password"] is True
        assert "PASSWORD" not in environ

    def test_link_without_name(self, environ, write_config, capsys):
        path = write_config("auth: password\n")

        assert run(["--json", "--link", "--config", str(path)], environ) == 0

        data = read_json(capsys.readouterr().out)["data"]
        assert data["link"] is None
        assert (data["host"], data["port"], data["auth"]) == ("localhost", 0, "none")

    def test_table_output(self, environ, write_config, capsys):
        path = write_config("bind-addr: 127.0.0.1:8080\n")

        assert run(["--config", str(path)], environ) == 0

        out = capsys.readouterr().out
        assert "Resolved configuration" in out
        assert "bind-addr" in out
        assert "127.0.0.1:8080" in out


class TestExistingInstance:
    """Test handing targets to a running instance."""

    def test_integrated_terminal(self, environ, tmp_path: Path, capsys, monkeypatch, mocker):
        monkeypatch.chdir(tmp_path)
        read_config = mocker.patch("remotecode.cli.main.read_config_file")
        environ["VSCODE_IPC_HOOK_CLI"] = "/tmp/vscode-ipc-1.sock"

        assert run(["project"], environ) == 0

        assert capsys.readouterr().out.strip() == "Opening in existing instance at /tmp/vscode-ipc-1.sock"
        read_config.assert_not_called()

    def test_integrated_terminal_json(self, environ, tmp_path: Path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        environ["VSCODE_IPC_HOOK_CLI"] = "/tmp/vscode-ipc-1.sock"

        assert run(["--json", "project"], environ) == 0

        document = read_json(capsys.readouterr().out)
        assert document["command"] == "open"
        assert document["data"] == {"socket": "/tmp/vscode-ipc-1.sock", "targets": ["project"]}


class TestErrors:
    """Test error reporting and exit codes."""

    def test_unknown_option(self, environ, capsys):
        assert run(["--bogus"], environ) == 1

        assert capsys.readouterr().err.endswith("Error: Unknown option --bogus\n")

    def test_password_on_command_line(self, environ, capsys):
        assert run(["--password=hunter2"], environ) == 1

        err = capsys.readouterr().err
        assert "Error: --password can only be set in the config file or passed in via $PASSWORD" in err
        assert "hunter2" not in err

    def test_json_error(self, environ, capsys):
        assert run(["--json", "--port=abc"], environ) == 1

        document = read_json(capsys.readouterr().out)
        assert document["success"] is False
        assert document["error"]["message"] == "--port must be a number"
        assert document["error"]["code"] == "INVALID_NUMBER"
        assert document["error"]["exit_code"] == 1

    def test_invalid_config_file(self, environ, write_config, capsys):
        path = write_config("hello\n")

        assert run(["--config", str(path)], environ) == 1

        assert "Error: invalid config: hello" in capsys.readouterr().err

    def test_invalid_bind_address(self, environ, capsys):
        assert run(["--bind-addr", "localhost:http"], environ) == 1

        assert "Error: invalid bind address: localhost:http" in capsys.readouterr().err

    def test_out_of_range_port(self, environ, capsys):
        assert run(["--port", "70000"], environ) == 1

        assert "Error: --port:" in capsys.readouterr().err

    def test_file_system_error(self, environ, capsys, mocker):
        mocker.patch("remotecode.cli.main.read_config_file", side_effect=PermissionError("denied"))

        assert run([], environ) == 1

        assert "Error: File system error: denied" in capsys.readouterr().err

    def test_interrupt(self, environ, capsys, mocker):
        mocker.patch("remotecode.cli.main.read_config_file", side_effect=KeyboardInterrupt)

        assert run([], environ) == 130

        assert "Error: Command interrupted by user" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["--", "--json"], "Error: File system error: denied"),
        (["--bogus", "--", "--json"], "Error: Unknown option --bogus"),
    ],
)
def test_json_after_terminator_is_positional(argv, message, environ, capsys, mocker):
    mocker.patch("remotecode.cli.main.should_open_in_existing_instance", return_value=None)
    mocker.patch("remotecode.cli.main.read_config_file", side_effect=PermissionError("denied"))

    assert run(argv, environ) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert message in captured.err
