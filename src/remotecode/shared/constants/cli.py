"""
CLI Configuration Constants

This module contains all constants related to the command-line interface:
help text, output messages and exit codes.
"""

from __future__ import annotations

from .system import Application


class CLIDefaults:
    """Default CLI values."""

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130

    VERSION = Application.VERSION


class CLISources:
    """Argument sources accepted by the tokenizer."""

    CLI = "cli"
    CONFIG_FILE = "config-file"


class CLIHelp:
    """Help text constants."""

    USAGE = "Usage: {name} [options] [path]"
    OPTIONS_HEADER = "Options"
    VERSION_TEXT = "{version}"
    BETA_MARKER = "(beta) "


class CLIMessages:
    """CLI message templates."""

    WROTE_DEFAULT_CONFIG = "Wrote default config file to %s"
    EXISTING_INSTANCE = "Opening in existing instance at {handle}"
    RESOLVED_TITLE = "Resolved configuration"
    ERROR_PREFIX = "Error: {message}\n"
