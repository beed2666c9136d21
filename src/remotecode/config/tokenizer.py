"""Argument tokenizer.

Turns a flat list of argument strings into an ArgSet by walking it once,
left to right. Command-line arguments and config file entries (projected
into ``--key=value`` tokens) both go through :func:`parse`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from typing import Any

from remotecode.config.models import ArgSet, OptionalString
from remotecode.config.schema import RESTRICTED_OPTIONS, OptionSpec, ValueKind, find_option, find_short
from remotecode.shared.constants import CLISources, FileSystem
from remotecode.shared.errors import (
    create_invalid_enum_error,
    create_invalid_number_error,
    create_missing_cert_key_error,
    create_missing_value_error,
    create_restricted_option_error,
    create_unknown_option_error,
)
from remotecode.shared.logging import redact

logger = logging.getLogger(__name__)

TERMINATOR = "--"

# Inline value that leaves an optional-string option unset, so a config
# file can say ``cert: false``.
UNSET_VALUE = "false"

Converter = Callable[[OptionSpec, str, Any, str | None], Any]


def split_on_first_equals(text: str) -> tuple[str, str | None]:
    """Split ``name=value`` at the first ``=`` only.

    Everything after the first ``=`` belongs to the value, which matters for
    values such as argon2 hashes (``$argon2i$v=19$m=4096,t=3,p=1$...``).

    Returns:
        The name and the value, or None when there is no ``=``
    """
    name, sep, value = text.partition("=")
    return name, (value if sep else None)


def _to_string(spec: OptionSpec, value: str, current: Any, config_file: str | None) -> str:
    return value


def _to_string_list(spec: OptionSpec, value: str, current: Any, config_file: str | None) -> list[str]:
    return [*(current or []), value]


def parse_decimal(value: str) -> int:
    """Parse an optionally negative run of ASCII digits.

    Raises:
        ValueError: For anything else, including signs, spaces and underscores
            that ``int()`` would accept
    """
    digits = value[1:] if value.startswith("-") else value
    if not (digits.isascii() and digits.isdigit()):
        msg = f"invalid decimal integer: {value!r}"
        raise ValueError(msg)
    return int(value, 10)


def _to_number(spec: OptionSpec, value: str, current: Any, config_file: str | None) -> int:
    try:
        return parse_decimal(value)
    except ValueError as e:
        raise create_invalid_number_error(spec.name, value, config_file, e) from e


def _to_enum(spec: OptionSpec, value: str, current: Any, config_file: str | None) -> Any:
    if value not in spec.choice_values():
        raise create_invalid_enum_error(spec.name, value, spec.choice_values(), config_file)
    return spec.choices(value)


def _to_optional_string(
    spec: OptionSpec,
    value: str,
    current: Any,
    config_file: str | None,
) -> OptionalString:
    return OptionalString(value)


_CONVERTERS: dict[ValueKind, Converter] = {
    ValueKind.STRING: _to_string,
    ValueKind.STRING_LIST: _to_string_list,
    ValueKind.NUMBER: _to_number,
    ValueKind.ENUM: _to_enum,
    ValueKind.OPTIONAL_STRING: _to_optional_string,
}


def resolve_path(value: str, cwd: str | None = None) -> str:
    """Resolve ``value`` against ``cwd`` into a normalized absolute path."""
    return os.path.normpath(os.path.join(cwd or os.getcwd(), value))


def _infer_target(args: ArgSet, cwd: str | None) -> None:
    """Turn positional arguments into a workspace file or a folder."""
    first = resolve_path(args.positional[0], cwd)
    if os.path.isfile(first) and os.path.splitext(first)[1] == FileSystem.WORKSPACE_EXTENSION:
        args.values["workspace"] = first
        args.inferred.add("workspace")
        args.positional.pop(0)
    else:
        args.values["folder"] = " ".join(args.positional)
        args.inferred.add("folder")


def parse(
    argv: Sequence[str],
    *,
    source: str = CLISources.CLI,
    config_file: str | None = None,
    cwd: str | None = None,
) -> ArgSet:
    """Tokenize ``argv`` into an ArgSet.

    Args:
        argv: Argument strings, without the program name
        source: ``"cli"`` or ``"config-file"``; passwords are only accepted
            from the config file
        config_file: Path of the config file, used to prefix error messages
        cwd: Directory relative paths resolve against (defaults to the
            process working directory)

    Returns:
        The parsed ArgSet

    Raises:
        ArgumentError: On the first unknown option, missing or invalid
            value, restricted option, or certificate without a key
    """
    args = ArgSet()
    ended = False
    i = 0

    while i < len(argv):
        arg = argv[i]
        i += 1

        if not ended and arg == TERMINATOR:
            ended = True
            continue

        if ended or not arg.startswith("-"):
            args.positional.append(arg)
            continue

        value: str | None = None
        if arg.startswith("--"):
            name, value = split_on_first_equals(arg[2:])
            spec = find_option(name)
            label = f"--{name}"
        else:
            spec = find_short(arg[1:])
            label = arg
        if spec is None:
            raise create_unknown_option_error(label, config_file)

        if spec.name in RESTRICTED_OPTIONS and source != CLISources.CONFIG_FILE:
            raise create_restricted_option_error(spec.name, RESTRICTED_OPTIONS[spec.name])

        if spec.kind is ValueKind.FLAG:
            args.values[spec.name] = True
            continue

        # A following token is only a value if it doesn't look like an option.
        if value is None and i < len(argv) and argv[i] and not argv[i].startswith("-"):
            value = argv[i]
            i += 1

        if not value:
            if spec.kind is ValueKind.OPTIONAL_STRING:
                args.values[spec.name] = OptionalString()
                continue
            raise create_missing_value_error(spec.name, config_file)

        if spec.kind is ValueKind.OPTIONAL_STRING and value == UNSET_VALUE:
            continue

        if spec.path:
            value = resolve_path(value, cwd)

        convert = _CONVERTERS[spec.kind]
        args.values[spec.name] = convert(spec, value, args.values.get(spec.name), config_file)

    if args.positional and not args.folder and not args.workspace:
        _infer_target(args, cwd)

    if "cert" in args.values and not args.values.get("cert-key"):
        raise create_missing_cert_key_error(config_file)

    logger.debug("Parsed %s arguments: %s", source, redact(args.values))

    return args
