"""Existing instance detection.

Decides whether a launch should hand its targets to an instance that is
already running instead of starting a new one.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from remotecode.config.models import ArgSet
from remotecode.shared.constants import EnvVars, FileSystem
from remotecode.utils.net import can_connect

logger = logging.getLogger(__name__)

DEFAULT_SOCKET_PATH = Path(tempfile.gettempdir()) / FileSystem.IPC_SOCKET_FILE_NAME

WINDOW_FLAGS = ("reuse-window", "new-window")


def read_socket_path(path: str | Path = DEFAULT_SOCKET_PATH) -> str | None:
    """Read the socket path a running instance advertised in ``path``.

    Returns:
        The socket path, or None if the file does not exist or is empty

    Raises:
        OSError: For any failure other than a missing file
    """
    try:
        with open(path, encoding=FileSystem.DEFAULT_ENCODING) as f:
            content = f.read().strip()
    except FileNotFoundError:
        return None
    return content or None


def should_open_in_existing_instance(
    args: ArgSet,
    environ: Mapping[str, str] | None = None,
    socket_path: str | Path = DEFAULT_SOCKET_PATH,
) -> str | None:
    """Return the socket of a running instance to delegate to, if any.

    Args:
        args: Command line arguments, before the config file is merged in
        environ: Environment to consult (defaults to ``os.environ``)
        socket_path: File where a running instance advertises its socket

    Returns:
        Socket path of the instance to open the targets in, or None to
        start a new instance
    """
    environ = os.environ if environ is None else environ

    # Set inside the integrated terminal of a running instance.
    ipc_hook = environ.get(EnvVars.IPC_HOOK_CLI)
    if ipc_hook:
        return ipc_hook

    if any(args.get(flag) for flag in WINDOW_FLAGS):
        return read_socket_path(socket_path)

    # Only targets were given, so open them where the user already works.
    has_targets = bool(args.positional) or bool(args.workspace)
    if not args.explicit() and has_targets:
        socket = read_socket_path(socket_path)
        if socket and can_connect(socket):
            return socket
        logger.debug("No live instance at %s", socket_path)

    return None
