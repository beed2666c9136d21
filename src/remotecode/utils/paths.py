"""
Platform directory resolution.

Default config and data directories for the current user, following the
XDG base directory convention on Linux, ``~/Library`` on macOS and the
``%APPDATA%`` / ``%LOCALAPPDATA%`` folders on Windows.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from remotecode.shared.constants import EnvVars, FileSystem


@dataclass(frozen=True)
class AppPaths:
    """Per-user application directories."""

    config: Path
    data: Path


def app_paths(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
    home: Path | None = None,
) -> AppPaths:
    """Resolve the default config and data directories.

    Args:
        environ: Environment to consult (defaults to ``os.environ``)
        platform: Platform identifier as in ``sys.platform``
        home: Home directory (defaults to ``Path.home()``)

    Returns:
        AppPaths for the current user
    """
    environ = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform
    home = Path.home() if home is None else home
    name = FileSystem.APP_DIR

    if platform == "darwin":
        library = home / "Library"
        return AppPaths(
            config=library / "Preferences" / name,
            data=library / "Application Support" / name,
        )

    if platform.startswith("win"):
        appdata = Path(environ.get(EnvVars.APPDATA) or home / "AppData" / "Roaming")
        local = Path(environ.get(EnvVars.LOCALAPPDATA) or home / "AppData" / "Local")
        return AppPaths(config=appdata / name / "Config", data=local / name / "Data")

    config_home = environ.get(EnvVars.XDG_CONFIG_HOME) or home / ".config"
    data_home = environ.get(EnvVars.XDG_DATA_HOME) or home / ".local" / "share"
    return AppPaths(config=Path(config_home) / name, data=Path(data_home) / name)


def human_path(path: str | Path, home: Path | None = None) -> str:
    """Abbreviate the home directory prefix of ``path`` to ``~``."""
    home = Path.home() if home is None else home
    text = str(path)
    home_text = str(home)
    if text == home_text:
        return "~"
    if text.startswith(home_text + os.sep):
        return "~" + text[len(home_text) :]
    return text
