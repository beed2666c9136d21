"""
System Configuration Constants

This module contains constants related to the host system: application
directories, file names and well-known file locations.
"""

from __future__ import annotations


class Application:
    """Application identity constants."""

    NAME = "remotecode"
    VERSION = "0.1.0"


class FileSystem:
    """File system related constants."""

    # Directory names
    APP_DIR = Application.NAME
    EXTENSIONS_DIRECTORY = "extensions"

    # File names
    CONFIG_FILE_NAME = "config.yaml"
    IPC_SOCKET_FILE_NAME = "vscode-ipc"

    # File extensions
    WORKSPACE_EXTENSION = ".code-workspace"
    CERTIFICATE_EXTENSION = ".crt"
    CERTIFICATE_KEY_EXTENSION = ".key"

    # Encoding
    DEFAULT_ENCODING = "utf-8"

    # Permissions
    PRIVATE_FILE_MODE = 0o600


class Network:
    """Network related constants."""

    DEFAULT_HOST = "localhost"
    DEFAULT_PORT = 8080
    # Port assumed when a bind address carries none (http scheme default).
    BIND_ADDR_FALLBACK_PORT = 80
    # Port used when relaying through a link; 0 asks the OS for any free port.
    EPHEMERAL_PORT = 0
    DEFAULT_CONFIG_BIND_ADDR = "127.0.0.1:8080"
    CONNECT_TIMEOUT_SECONDS = 1.0


class Security:
    """Security related constants."""

    PASSWORD_LENGTH = 24
    CERTIFICATE_KEY_SIZE = 2048
    CERTIFICATE_PUBLIC_EXPONENT = 65537
    CERTIFICATE_VALIDITY_DAYS = 365
    DEFAULT_CERT_HOST = "localhost"
