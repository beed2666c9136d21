"""
RemoteCode Constants Module

This module provides centralized constants for the RemoteCode application.
All magic values and configuration constants are defined here to ensure
consistency across the codebase.
"""

from .cli import CLIDefaults, CLIHelp, CLIMessages, CLISources
from .environment import EnvVars
from .logging import LogConfig, LogLevels
from .system import Application, FileSystem, Network, Security

APPLICATION_VERSION = Application.VERSION

__all__ = [
    "APPLICATION_VERSION",
    "Application",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "CLISources",
    "EnvVars",
    "FileSystem",
    "LogConfig",
    "LogLevels",
    "Network",
    "Security",
]
