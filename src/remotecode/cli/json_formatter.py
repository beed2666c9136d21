"""
JSON documents written by the RemoteCode CLI under ``--json``.

Every document carries ``success`` and ``command``. A successful command adds
``data``: the resolved configuration (secrets masked), the version, or the
running instance the targets were handed to. A failed command adds ``error``
with the ErrorCode, message, exit code and ErrorContext of the failure.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import IO, Any

import orjson

from remotecode.config.models import Configuration
from remotecode.shared.errors import CliError

_DUMP_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE


def _dump(command: str | None, **fields: Any) -> bytes:
    return orjson.dumps({"command": command, **fields}, option=_DUMP_OPTIONS)


def resolve_document(config: Configuration) -> bytes:
    """Describe a resolved configuration, keyed by option name."""
    return _dump("resolve", success=True, data=config.summary())


def version_document(version: str) -> bytes:
    return _dump("version", success=True, data={"version": version})


def open_document(socket: str, targets: Sequence[str]) -> bytes:
    """Describe targets handed to the instance listening on ``socket``."""
    return _dump("open", success=True, data={"socket": socket, "targets": list(targets)})


def error_document(error: CliError, error_type: str) -> bytes:
    """Describe a failed command.

    Args:
        error: The CLI error the failure was mapped to
        error_type: Class name of the exception that caused the failure

    Returns:
        JSON-encoded bytes, newline terminated
    """
    return _dump(
        error.command,
        success=False,
        error={**error.to_dict(), "exit_code": error.exit_code, "type": error_type},
    )


def write_document(document: bytes, stream: IO[bytes] | None = None) -> None:
    """Write ``document`` after any pending text output on stdout."""
    sys.stdout.flush()
    out = sys.stdout.buffer if stream is None else stream
    out.write(document)
    out.flush()
