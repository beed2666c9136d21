"""Option schema.

The closed table of every option RemoteCode recognizes, keyed by option
name. The tokenizer, the config file loader and the help output all read
from this table; nothing modifies it at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from remotecode.config.models import AuthType, LogLevel
from remotecode.shared.constants import CLIHelp, EnvVars


class ValueKind(str, Enum):
    """How an option's value is read and stored."""

    FLAG = "boolean"
    STRING = "string"
    STRING_LIST = "string[]"
    OPTIONAL_STRING = "optional-string"
    ENUM = "enum"
    NUMBER = "number"


@dataclass(frozen=True)
class OptionSpec:
    """Declaration of one option.

    Attributes:
        name: Long option name, also the config file key
        kind: Value kind
        short: Short alias used as ``-short``
        path: Resolve the value to an absolute path before storing it
        description: Help text; options without one are hidden from help
        beta: Mark the option as beta in help
        choices: Enum type for ENUM options
    """

    name: str
    kind: ValueKind
    short: str | None = None
    path: bool = False
    description: str | None = None
    beta: bool = False
    choices: type[Enum] | None = None

    def choice_values(self) -> list[str]:
        if self.choices is None:
            return []
        return [member.value for member in self.choices]


def _options(*specs: OptionSpec) -> MappingProxyType[str, OptionSpec]:
    table: dict[str, OptionSpec] = {}
    shorts: set[str] = set()
    for spec in specs:
        if spec.name in table:
            msg = f"Duplicate option {spec.name}"
            raise ValueError(msg)
        if spec.short is not None:
            if spec.short in shorts:
                msg = f"Duplicate short alias -{spec.short}"
                raise ValueError(msg)
            shorts.add(spec.short)
        table[spec.name] = spec
    return MappingProxyType(table)


OPTIONS = _options(
    OptionSpec("auth", ValueKind.ENUM, choices=AuthType, description="The type of authentication to use."),
    OptionSpec(
        "password",
        ValueKind.STRING,
        description="The password for password authentication (can only be passed in via $PASSWORD or the config file).",
    ),
    OptionSpec(
        "hashed-password",
        ValueKind.STRING,
        description=(
            "The password hashed with argon2 for password authentication (can only be passed in via "
            "$HASHED_PASSWORD or the config file).\nTakes precedence over 'password'."
        ),
    ),
    OptionSpec(
        "cert",
        ValueKind.OPTIONAL_STRING,
        path=True,
        description="Path to certificate. A self signed certificate is generated if none is provided.",
    ),
    OptionSpec(
        "cert-host",
        ValueKind.STRING,
        description="Hostname to use when generating a self signed certificate.",
    ),
    OptionSpec(
        "cert-key",
        ValueKind.STRING,
        path=True,
        description="Path to certificate key when using non-generated cert.",
    ),
    OptionSpec("disable-telemetry", ValueKind.FLAG, description="Disable telemetry."),
    OptionSpec(
        "disable-update-check",
        ValueKind.FLAG,
        description=(
            "Disable update check. Without this flag, the server checks every 6 hours against the latest\n"
            "release and then notifies you once every week that a new release is available."
        ),
    ),
    # Experimental features; no guarantees.
    OptionSpec("enable", ValueKind.STRING_LIST),
    OptionSpec("help", ValueKind.FLAG, short="h", description="Show this output."),
    OptionSpec("json", ValueKind.FLAG),
    OptionSpec("open", ValueKind.FLAG, description="Open in browser on startup. Does not work remotely."),
    OptionSpec(
        "bind-addr",
        ValueKind.STRING,
        description="Address to bind to in host:port. You can also use $PORT to override the port.",
    ),
    OptionSpec(
        "config",
        ValueKind.STRING,
        description="Path to yaml config file. Every flag maps directly to a key in the config file.",
    ),
    # Superseded by bind-addr; kept for existing configs.
    OptionSpec("host", ValueKind.STRING),
    OptionSpec("port", ValueKind.NUMBER),
    OptionSpec("socket", ValueKind.STRING, path=True, description="Path to a socket (bind-addr will be ignored)."),
    OptionSpec("version", ValueKind.FLAG, short="v", description="Display version information."),
    OptionSpec("user-data-dir", ValueKind.STRING, path=True, description="Path to the user data directory."),
    OptionSpec("extensions-dir", ValueKind.STRING, path=True, description="Path to the extensions directory."),
    OptionSpec("builtin-extensions-dir", ValueKind.STRING, path=True),
    OptionSpec("list-extensions", ValueKind.FLAG, description="List installed extensions."),
    OptionSpec("force", ValueKind.FLAG, description="Avoid prompts when installing extensions."),
    OptionSpec("locate-extension", ValueKind.STRING_LIST),
    OptionSpec(
        "install-extension",
        ValueKind.STRING_LIST,
        description=(
            "Install or update an extension by id or vsix. The identifier of an extension is "
            "'publisher.name'.\nTo install a specific version provide '@version'. For example: "
            "'vscode.csharp@1.2.3'."
        ),
    ),
    OptionSpec("uninstall-extension", ValueKind.STRING_LIST, description="Uninstall an extension by id."),
    OptionSpec("show-versions", ValueKind.FLAG, description="Show extension versions."),
    OptionSpec("proxy-domain", ValueKind.STRING_LIST, description="Domain used for proxying ports."),
    OptionSpec("new-window", ValueKind.FLAG, short="n", description="Force to open a new window."),
    OptionSpec(
        "reuse-window",
        ValueKind.FLAG,
        short="r",
        description="Force to open a file or folder in an already opened window.",
    ),
    OptionSpec("log", ValueKind.ENUM, choices=LogLevel, description="Log level."),
    OptionSpec("verbose", ValueKind.FLAG, short="vvv", description="Enable verbose logging."),
    OptionSpec(
        "link",
        ValueKind.OPTIONAL_STRING,
        beta=True,
        description=(
            "Securely bind the server via the relay service with the passed name.\n"
            "Authorization is done by the relay."
        ),
    ),
    OptionSpec(
        "connection-secret",
        ValueKind.STRING,
        description=(
            "Path to file that contains the connection token. This will require that all incoming "
            "connections know the secret."
        ),
    ),
    OptionSpec("socket-path", ValueKind.STRING),
    OptionSpec("start-server", ValueKind.FLAG),
    OptionSpec("print-startup-performance", ValueKind.FLAG),
    OptionSpec("print-ip-address", ValueKind.FLAG),
    OptionSpec("disable-websocket-compression", ValueKind.FLAG),
    OptionSpec("enable-remote-auto-shutdown", ValueKind.FLAG),
    OptionSpec("remote-auto-shutdown-without-delay", ValueKind.FLAG),
    OptionSpec("without-browser-env-var", ValueKind.FLAG),
    OptionSpec("extensions-download-dir", ValueKind.STRING),
    OptionSpec("install-builtin-extension", ValueKind.STRING_LIST),
    OptionSpec(
        "category",
        ValueKind.STRING,
        description="Filters installed extensions by provided category, when using --list-extensions.",
    ),
    OptionSpec("do-not-sync", ValueKind.FLAG),
    OptionSpec("force-disable-user-env", ValueKind.FLAG),
    OptionSpec("folder", ValueKind.STRING),
    OptionSpec("workspace", ValueKind.STRING),
    OptionSpec("web-user-data-dir", ValueKind.STRING),
    OptionSpec("use-host-proxy", ValueKind.STRING),
    OptionSpec("enable-sync", ValueKind.FLAG),
    OptionSpec("github-auth", ValueKind.STRING),
    OptionSpec("logs-path", ValueKind.STRING),
)

# Options that may only come from the config file or the environment,
# mapped to the environment variable that can supply them.
RESTRICTED_OPTIONS = MappingProxyType(
    {
        "password": EnvVars.PASSWORD,
        "hashed-password": EnvVars.HASHED_PASSWORD,
    }
)


def find_option(name: str) -> OptionSpec | None:
    return OPTIONS.get(name)


def find_short(short: str) -> OptionSpec | None:
    """Return the option whose short alias is ``short``."""
    for spec in OPTIONS.values():
        if spec.short == short:
            return spec
    return None


def option_descriptions() -> list[str]:
    """Render one aligned help entry per documented option.

    Each entry reads ``-s --name  description``; continuation lines of
    multi-line descriptions are indented under the first, beta options are
    marked and enum options list their values.
    """
    documented = [spec for spec in OPTIONS.values() if spec.description]
    long_width = max(len(spec.name) for spec in documented)
    short_width = max(len(spec.short or "") for spec in documented)

    entries = []
    for spec in documented:
        short = spec.short or ""
        flag = f"-{short}" if short else " "
        head = f"{' ' * (short_width - len(short))}{flag} --{spec.name} "

        lines = []
        for i, line in enumerate(spec.description.strip().split("\n")):
            line = line.strip()
            if i == 0:
                beta = CLIHelp.BETA_MARKER if spec.beta else ""
                lines.append(" " * (long_width - len(spec.name)) + beta + line)
            else:
                lines.append(" " * (long_width + short_width + 5) + line)

        entry = head + "\n".join(lines)
        if spec.kind is ValueKind.ENUM:
            entry += f" [{', '.join(spec.choice_values())}]"
        entries.append(entry)
    return entries
