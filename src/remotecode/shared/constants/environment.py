"""
Environment Variable Constants

Names of every environment variable RemoteCode reads or writes.
"""

from __future__ import annotations


class EnvVars:
    """Environment variable names."""

    # Secrets (read once, then removed from the process environment)
    PASSWORD = "PASSWORD"  # noqa: S105  # nosec B105 - Variable name, not a secret
    HASHED_PASSWORD = "HASHED_PASSWORD"  # noqa: S105  # nosec B105 - Variable name, not a secret

    # Bind address and logging
    PORT = "PORT"
    LOG_LEVEL = "LOG_LEVEL"

    # Config file location override
    CONFIG = "REMOTECODE_CONFIG"

    # Set by an IDE's integrated terminal to point at the running instance
    IPC_HOOK_CLI = "VSCODE_IPC_HOOK_CLI"

    # Platform directories
    XDG_CONFIG_HOME = "XDG_CONFIG_HOME"
    XDG_DATA_HOME = "XDG_DATA_HOME"
    APPDATA = "APPDATA"
    LOCALAPPDATA = "LOCALAPPDATA"
