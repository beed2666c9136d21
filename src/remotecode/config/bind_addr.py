"""Bind address resolution.

The address is layered from hard defaults, the config file and the command
line, in that order. Within one layer ``bind-addr`` is applied first, then
``host``, then ``$PORT``, then ``port``; each step returns a new Addr.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from urllib.parse import urlsplit

from remotecode.config.models import Addr, ArgSet
from remotecode.config.tokenizer import parse_decimal
from remotecode.shared.constants import EnvVars, Network
from remotecode.shared.errors import create_invalid_bind_address_error, create_invalid_number_error

DEFAULT_ADDR = Addr(host=Network.DEFAULT_HOST, port=Network.DEFAULT_PORT)


def parse_bind_addr(bind_addr: str) -> Addr:
    """Parse ``host[:port]`` as the authority of an http URL.

    A missing port means the http default, 80, not the service default.

    Raises:
        ArgumentError: If the address has no host or an invalid port
    """
    try:
        url = urlsplit(f"http://{bind_addr}")
        port = url.port
    except ValueError as e:
        raise create_invalid_bind_address_error(bind_addr, e) from e
    if not url.hostname:
        raise create_invalid_bind_address_error(bind_addr)
    return Addr(host=url.hostname, port=port if port is not None else Network.BIND_ADDR_FALLBACK_PORT)


def _parse_env_port(value: str, env_var: str) -> int:
    try:
        return parse_decimal(value)
    except ValueError as e:
        raise create_invalid_number_error(env_var, value, original_error=e, label=f"${env_var}") from e


def bind_addr_from_args(addr: Addr, args: ArgSet, environ: Mapping[str, str] | None = None) -> Addr:
    """Apply one argument layer on top of ``addr``.

    Args:
        addr: Address from the previous layer
        args: Arguments of this layer
        environ: Environment consulted for ``$PORT`` (defaults to ``os.environ``)

    Returns:
        The new address
    """
    environ = os.environ if environ is None else environ

    if args.get("bind-addr"):
        addr = parse_bind_addr(args["bind-addr"])
    if args.get("host"):
        addr = addr.with_host(args["host"])
    if environ.get(EnvVars.PORT):
        addr = addr.with_port(_parse_env_port(environ[EnvVars.PORT], EnvVars.PORT))
    if args.get("port") is not None:
        addr = addr.with_port(int(args["port"]))
    return addr


def bind_addr_from_all_sources(*layers: ArgSet, environ: Mapping[str, str] | None = None) -> Addr:
    """Fold argument layers, lowest priority first, over the default address."""
    addr = DEFAULT_ADDR
    for args in layers:
        addr = bind_addr_from_args(addr, args, environ)
    return addr
