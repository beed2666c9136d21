"""
RemoteCode configuration resolution.

Tokenizes command line arguments and config files against the option
schema, then merges them with the environment into a Configuration.
"""

from .bind_addr import bind_addr_from_all_sources, bind_addr_from_args, parse_bind_addr
from .defaults import set_defaults
from .delegation import read_socket_path, should_open_in_existing_instance
from .loader import default_config_file, parse_config_file, read_config_file
from .models import Addr, ArgSet, AuthType, Configuration, LogLevel, OptionalString
from .schema import OPTIONS, OptionSpec, ValueKind, option_descriptions
from .tokenizer import parse, split_on_first_equals

__all__ = [
    "OPTIONS",
    "Addr",
    "ArgSet",
    "AuthType",
    "Configuration",
    "LogLevel",
    "OptionSpec",
    "OptionalString",
    "ValueKind",
    "bind_addr_from_all_sources",
    "bind_addr_from_args",
    "default_config_file",
    "option_descriptions",
    "parse",
    "parse_bind_addr",
    "parse_config_file",
    "read_config_file",
    "read_socket_path",
    "set_defaults",
    "should_open_in_existing_instance",
    "split_on_first_equals",
]
