"""
Pytest configuration and shared fixtures for RemoteCode tests.

This module provides common fixtures and configuration that can be used
across all test modules in the project.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from remotecode.shared.constants import LogConfig


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at a temporary directory.

    Returns:
        Path of the temporary home directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def environ(tmp_path: Path, home_dir: Path) -> dict[str, str]:
    """Isolated environment with platform directories under tmp_path.

    Tests pass this dict wherever the code accepts ``environ`` so the real
    process environment is never read or modified.
    """
    return {
        "XDG_CONFIG_HOME": str(tmp_path / "config"),
        "XDG_DATA_HOME": str(tmp_path / "data"),
        "APPDATA": str(tmp_path / "config"),
        "LOCALAPPDATA": str(tmp_path / "data"),
    }


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path for a config file that does not exist yet."""
    return tmp_path / "remotecode" / "config.yaml"


@pytest.fixture
def write_config(config_path: Path):
    """Write config file text and return its path.

    Returns:
        Function taking the YAML text.
    """

    def _write(text: str) -> Path:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(text, encoding="utf-8")
        return config_path

    return _write


@pytest.fixture(autouse=True)
def reset_remotecode_logger() -> Generator[None, None, None]:
    """Undo logger configuration done by the CLI between tests."""
    yield
    logger = logging.getLogger(LogConfig.LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
