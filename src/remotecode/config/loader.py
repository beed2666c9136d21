"""Config file loader.

This module handles:
- Locating the YAML config file (argument, $REMOTECODE_CONFIG, default)
- Writing a default config file with a generated password on first launch
- Projecting the document's entries into ``--key=value`` tokens and
  tokenizing them with the same parser the command line uses
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from remotecode.config.models import ArgSet
from remotecode.config.schema import ValueKind, find_option
from remotecode.config.tokenizer import parse
from remotecode.security.passwords import generate_password
from remotecode.shared.constants import CLIMessages, CLISources, EnvVars, FileSystem, Network
from remotecode.shared.errors import create_invalid_config_error
from remotecode.utils.paths import app_paths, human_path

logger = logging.getLogger(__name__)


def default_config_file(password: str) -> str:
    """Return the config document written on first launch.

    Args:
        password: Password to store, usually from generate_password()

    Returns:
        YAML text binding to 127.0.0.1:8080 with password auth and no certificate
    """
    return (
        f"bind-addr: {Network.DEFAULT_CONFIG_BIND_ADDR}\n"
        "auth: password\n"
        f"password: {password}\n"
        "cert: false\n"
    )


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return $REMOTECODE_CONFIG, or config.yaml in the user config directory."""
    environ = os.environ if environ is None else environ
    override = environ.get(EnvVars.CONFIG)
    if override:
        return Path(override)
    return app_paths(environ).config / FileSystem.CONFIG_FILE_NAME


def _write_default_config(config_path: Path) -> None:
    """Create the default config file unless one already exists."""
    try:
        with open(config_path, "x", encoding=FileSystem.DEFAULT_ENCODING) as f:
            f.write(default_config_file(generate_password()))
    except FileExistsError:
        return
    logger.info(CLIMessages.WROTE_DEFAULT_CONFIG, human_path(config_path))


def read_config_file(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ArgSet:
    """Read the config file into an ArgSet, creating it first if missing.

    Args:
        config_path: Read this file instead of $REMOTECODE_CONFIG or the default
        environ: Environment to consult (defaults to ``os.environ``)

    Returns:
        ArgSet whose ``config`` attribute is the file that was read

    Raises:
        ConfigError: If the document is not a mapping or is not valid YAML
        ArgumentError: If an entry is not a valid option
        OSError: If the file or its directory cannot be created or read
    """
    path = Path(config_path) if config_path else default_config_path(environ)

    path.parent.mkdir(parents=True, exist_ok=True)
    _write_default_config(path)

    text = path.read_text(encoding=FileSystem.DEFAULT_ENCODING)
    return parse_config_file(text, str(path))


def _render(value: Any) -> str:
    """Render a scalar the way it reads in YAML."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _project(name: str, value: Any) -> list[str]:
    """Turn one document entry into flag tokens."""
    if value is False:
        spec = find_option(name)
        if spec is not None and spec.kind is ValueKind.FLAG:
            return []
    if value is True or value is None:
        return [f"--{name}"]
    if isinstance(value, list):
        return [f"--{name}={_render(item)}" for item in value]
    return [f"--{name}={_render(value)}"]


def config_to_argv(document: Mapping[Any, Any]) -> list[str]:
    """Project a config document into the flag tokens it stands for.

    ``true`` and ``null`` become a bare ``--key``, ``false`` drops a boolean
    option, a list becomes one ``--key=item`` per item, and any other value
    becomes ``--key=value``.
    """
    argv: list[str] = []
    for key, value in document.items():
        argv.extend(_project(str(key), value))
    return argv


def parse_config_file(text: str, config_path: str) -> ArgSet:
    """Parse config file text into an ArgSet.

    Args:
        text: Contents of the config file
        config_path: Path used in error messages and recorded on the result

    Returns:
        ArgSet with ``config`` set to ``config_path``

    Raises:
        ConfigError: If the text is not YAML or its top level is not a mapping
        ArgumentError: If an entry is not a valid option
    """
    if not text:
        return ArgSet(config=config_path)

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise create_invalid_config_error(f"error reading {config_path}: {e}", config_path, e) from e

    if not isinstance(document, dict):
        raise create_invalid_config_error(f"invalid config: {_render(document)}", config_path)

    args = parse(
        config_to_argv(document),
        source=CLISources.CONFIG_FILE,
        config_file=config_path,
    )
    args.config = config_path
    return args
