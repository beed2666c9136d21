"""Socket connectivity probe."""

from __future__ import annotations

import logging
import socket

from remotecode.shared.constants import Network

logger = logging.getLogger(__name__)


def can_connect(socket_path: str, timeout: float = Network.CONNECT_TIMEOUT_SECONDS) -> bool:
    """Return True if a Unix domain socket at ``socket_path`` accepts a connection.

    Args:
        socket_path: Filesystem path of the socket
        timeout: Seconds to wait for the connection

    Returns:
        True if the connection succeeded, False otherwise
    """
    family = getattr(socket, "AF_UNIX", None)
    if family is None:
        return False

    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.settimeout(timeout)
    try:
        sock.connect(socket_path)
    except OSError as e:
        logger.debug("Socket %s is not accepting connections: %s", socket_path, e)
        return False
    finally:
        sock.close()
    return True
