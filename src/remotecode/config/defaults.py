"""Defaults resolution.

Merges the config file and command line argument sets and fills in every
value the rest of the program relies on: data directories, log level,
auth mode, bind address, certificate and passwords.
"""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping
from typing import Any

from remotecode.config.bind_addr import bind_addr_from_all_sources
from remotecode.config.models import ArgSet, AuthType, Configuration, LogLevel, OptionalString
from remotecode.config.schema import OPTIONS
from remotecode.security.certificates import generate_certificate
from remotecode.shared.constants import EnvVars, FileSystem, Network, Security
from remotecode.shared.logging import apply_log_level
from remotecode.utils.paths import app_paths

logger = logging.getLogger(__name__)

WILDCARD_PREFIX = "*."


def merge_args(cli_args: ArgSet, config_args: ArgSet | None = None) -> dict[str, Any]:
    """Merge two argument sets option by option.

    For every option in the schema the command line value wins, then the
    config file value; options set in neither are left out. Positional
    arguments always come from the command line.

    Args:
        cli_args: Arguments from the command line
        config_args: Arguments from the config file

    Returns:
        Option name keyed mapping of the winning values
    """
    config_args = config_args or ArgSet()

    merged: dict[str, Any] = {}
    for name in OPTIONS:
        if name in cli_args:
            merged[name] = cli_args[name]
        elif name in config_args:
            merged[name] = config_args[name]

    if "config" not in merged and config_args.config:
        merged["config"] = config_args.config
    merged["positional"] = list(cli_args.positional)
    return merged


def resolve_log_level(
    verbose: bool,
    log: LogLevel | None,
    environ: MutableMapping[str, str],
) -> LogLevel | None:
    """Pick the log level: ``--verbose``, then ``--log``, then ``$LOG_LEVEL``.

    An unrecognized ``$LOG_LEVEL`` is ignored.
    """
    if verbose:
        return LogLevel.TRACE
    if log is not None:
        return log

    env_level = environ.get(EnvVars.LOG_LEVEL)
    if env_level in {level.value for level in LogLevel}:
        return LogLevel(env_level)
    return None


def normalize_proxy_domains(domains: list[str]) -> list[str]:
    """Strip a leading ``*.`` from each domain and drop duplicates, keeping order."""
    normalized: list[str] = []
    for domain in domains:
        if domain.startswith(WILDCARD_PREFIX):
            domain = domain[len(WILDCARD_PREFIX) :]
        if domain not in normalized:
            normalized.append(domain)
    return normalized


def set_defaults(
    cli_args: ArgSet,
    config_args: ArgSet | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> Configuration:
    """Resolve the final configuration from both argument sources.

    Command line values win over config file values. The environment is
    read for ``$LOG_LEVEL``, ``$PORT``, ``$PASSWORD`` and
    ``$HASHED_PASSWORD``; the resolved log level is written back to
    ``$LOG_LEVEL`` and both password variables are removed afterwards.

    Args:
        cli_args: Arguments from the command line
        config_args: Arguments from the config file, if one was read
        environ: Environment to read and update (defaults to ``os.environ``)

    Returns:
        The resolved Configuration

    Raises:
        ArgumentError: If the bind address or ``$PORT`` is invalid
        InfrastructureError: If a self-signed certificate cannot be generated
    """
    environ = os.environ if environ is None else environ
    args = merge_args(cli_args, config_args)

    if not args.get("user-data-dir"):
        args["user-data-dir"] = str(app_paths(environ).data)
    if not args.get("extensions-dir"):
        args["extensions-dir"] = os.path.join(args["user-data-dir"], FileSystem.EXTENSIONS_DIRECTORY)

    level = resolve_log_level(bool(args.get("verbose")), args.get("log"), environ)
    if level is not None:
        args["log"] = level
        environ[EnvVars.LOG_LEVEL] = level.value
        apply_log_level(level.value)
        args["verbose"] = level is LogLevel.TRACE

    if not args.get("auth"):
        args["auth"] = AuthType.PASSWORD

    addr = bind_addr_from_all_sources(config_args or ArgSet(), cli_args, environ=environ)
    args["host"] = addr.host
    args["port"] = addr.port

    # Relayed connections listen on a random local port and leave auth to the relay.
    if "link" in args:
        args["host"] = Network.DEFAULT_HOST
        args["port"] = Network.EPHEMERAL_PORT
        args.pop("socket", None)
        args.pop("cert", None)
        args["auth"] = AuthType.NONE

    cert = args.get("cert")
    if cert is not None and not cert.has_value:
        generated = generate_certificate(
            args.get("cert-host") or Security.DEFAULT_CERT_HOST,
            app_paths(environ).data,
        )
        args["cert"] = OptionalString(generated.cert)
        args["cert-key"] = generated.cert_key

    password = environ.pop(EnvVars.PASSWORD, None)
    hashed_password = environ.pop(EnvVars.HASHED_PASSWORD, None)

    using_env_password = bool(password)
    if password:
        args["password"] = password
    using_env_hashed_password = bool(hashed_password)
    if hashed_password:
        args["hashed-password"] = hashed_password
        using_env_password = False

    args["proxy-domain"] = normalize_proxy_domains(args.get("proxy-domain", []))
    args["using-env-password"] = using_env_password
    args["using-env-hashed-password"] = using_env_hashed_password

    config = Configuration.model_validate(args)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Resolved configuration: %s", config.summary())
    return config
