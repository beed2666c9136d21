"""
RemoteCode CLI Main Entry Point

Parses the command line, answers ``--help`` and ``--version``, hands the
targets to a running instance when there is one, and otherwise resolves
and prints the launch configuration.
"""

from __future__ import annotations

import os
import sys
from collections.abc import MutableMapping, Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from remotecode.cli.error_handler import handle_cli_error
from remotecode.cli.json_formatter import open_document, resolve_document, version_document, write_document
from remotecode.config.defaults import set_defaults
from remotecode.config.delegation import should_open_in_existing_instance
from remotecode.config.loader import read_config_file
from remotecode.config.models import ArgSet, Configuration
from remotecode.config.schema import option_descriptions
from remotecode.config.tokenizer import TERMINATOR, parse
from remotecode.shared.constants import Application, CLIDefaults, CLIHelp, CLIMessages
from remotecode.shared.logging import setup_structured_logger


def _wants_json(argv: Sequence[str]) -> bool:
    """Look for ``--json`` before parsing so parse errors honour it too."""
    for arg in argv:
        if arg == TERMINATOR:
            return False
        if arg == "--json":
            return True
    return False


def render_help(name: str = Application.NAME) -> str:
    """Return the usage line followed by the option descriptions."""
    lines = [CLIHelp.USAGE.format(name=name), "", f"{CLIHelp.OPTIONS_HEADER}:"]
    for entry in option_descriptions():
        lines.extend(f"  {line}" for line in entry.split("\n"))
    return "\n".join(lines)


def _format_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _config_table(config: Configuration) -> Table:
    table = Table(title=CLIMessages.RESOLVED_TITLE)
    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in config.summary().items():
        table.add_row(name, _format_value(value))
    return table


def _report_existing_instance(console: Console, handle: str, args: ArgSet, *, json_output: bool) -> None:
    targets = [*([args.workspace] if args.workspace else []), *args.positional]
    if json_output:
        write_document(open_document(handle, targets))
    else:
        console.print(CLIMessages.EXISTING_INSTANCE.format(handle=handle))


def run(
    argv: Sequence[str] | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> int:
    """
    Main entry point for the RemoteCode CLI.

    Args:
        argv: Arguments without the program name (defaults to ``sys.argv[1:]``)
        environ: Environment to read and update (defaults to ``os.environ``)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    environ = os.environ if environ is None else environ
    json_output = _wants_json(argv)

    setup_structured_logger()
    console = Console(markup=False, highlight=False, soft_wrap=True)

    try:
        args = parse(argv)

        if args.get("help"):
            console.print(render_help())
            return CLIDefaults.EXIT_SUCCESS

        if args.get("version"):
            if json_output:
                write_document(version_document(CLIDefaults.VERSION))
            else:
                console.print(CLIHelp.VERSION_TEXT.format(version=CLIDefaults.VERSION))
            return CLIDefaults.EXIT_SUCCESS

        handle = should_open_in_existing_instance(args, environ)
        if handle:
            _report_existing_instance(console, handle, args, json_output=json_output)
            return CLIDefaults.EXIT_SUCCESS

        config_args = read_config_file(args.get("config"), environ)
        config = set_defaults(args, config_args, environ)

        if json_output:
            write_document(resolve_document(config))
        else:
            console.print(_config_table(config))
        return CLIDefaults.EXIT_SUCCESS

    except (KeyboardInterrupt, Exception) as e:
        return handle_cli_error(e, Application.NAME, json_output=json_output)


def main() -> None:
    """Console script entry point."""
    sys.exit(run())
