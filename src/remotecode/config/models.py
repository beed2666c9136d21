"""Configuration data model.

Value types shared by the tokenizer, the config file loader and the
defaults resolver:

- AuthType / LogLevel: enumerated option values
- OptionalString: an option that may be present without a value
- ArgSet: the typed result of tokenizing one argument source
- Addr: an immutable host/port pair
- Configuration: the fully resolved, validated launch configuration
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from remotecode.shared.logging import redact


class AuthType(str, Enum):
    """Authentication modes."""

    PASSWORD = "password"
    NONE = "none"


class LogLevel(str, Enum):
    """Log levels accepted by ``--log`` and ``$LOG_LEVEL``."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class OptionalString:
    """An option that can be given with or without a value.

    Absence of the option is represented by the option not being set at all.
    ``OptionalString()`` means the option was given without a value (for
    ``--cert`` that asks for a generated certificate) and
    ``OptionalString("x")`` carries an explicit value.
    """

    value: str | None = None

    @property
    def has_value(self) -> bool:
        return bool(self.value)


@dataclass
class ArgSet:
    """Typed options from one argument source.

    Attributes:
        values: Option name to typed value, only for options that were set
        positional: Leftover arguments in encounter order
        inferred: Names of options filled in from positional arguments
            (folder or workspace) rather than given as flags
        config: Path of the config file this set was read from, if any
    """

    values: dict[str, Any] = field(default_factory=dict)
    positional: list[str] = field(default_factory=list)
    inferred: set[str] = field(default_factory=set)
    config: str | None = None

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def explicit(self) -> list[str]:
        """Names of the options set by flags, in the order they were set."""
        return [name for name in self.values if name not in self.inferred]

    @property
    def folder(self) -> str:
        return self.values.get("folder", "")

    @property
    def workspace(self) -> str:
        return self.values.get("workspace", "")


@dataclass(frozen=True)
class Addr:
    """Host and port to bind to."""

    host: str
    port: int

    def with_host(self, host: str) -> Addr:
        return replace(self, host=host)

    def with_port(self, port: int) -> Addr:
        return replace(self, port=port)


def _dashed(name: str) -> str:
    return name.replace("_", "-")


class Configuration(BaseModel):
    """Fully resolved launch configuration.

    Field aliases are the option names (``user-data-dir`` for
    ``user_data_dir``), so a merged option mapping validates directly.
    """

    model_config = ConfigDict(
        alias_generator=_dashed,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    # Always populated after resolution
    auth: AuthType = Field(description="Authentication mode")
    host: str = Field(description="Host to bind to")
    port: int = Field(ge=0, le=65535, description="Port to bind to")
    proxy_domain: list[str] = Field(default_factory=list, description="Normalized proxy domains")
    user_data_dir: str = Field(description="User data directory")
    extensions_dir: str = Field(description="Extensions directory")
    verbose: bool = Field(default=False, description="Verbose logging enabled")
    using_env_password: bool = Field(default=False, description="Password came from $PASSWORD")
    using_env_hashed_password: bool = Field(
        default=False,
        description="Hashed password came from $HASHED_PASSWORD",
    )

    # Secrets and certificates
    password: str | None = None
    hashed_password: str | None = None
    cert: OptionalString | None = None
    cert_host: str | None = None
    cert_key: str | None = None

    # Binding
    bind_addr: str | None = None
    socket: str | None = None
    link: OptionalString | None = None

    # Logging
    log: LogLevel | None = None

    # Launch targets
    folder: str = ""
    workspace: str = ""
    positional: list[str] = Field(default_factory=list)
    config: str | None = None

    # Behaviour flags
    disable_telemetry: bool = False
    disable_update_check: bool = False
    enable: list[str] = Field(default_factory=list)
    help: bool = False
    json_output: bool = Field(default=False, alias="json")
    open: bool = False
    version: bool = False
    new_window: bool = False
    reuse_window: bool = False

    # Extension management
    builtin_extensions_dir: str | None = None
    extensions_download_dir: str | None = None
    list_extensions: bool = False
    force: bool = False
    show_versions: bool = False
    category: str | None = None
    locate_extension: list[str] = Field(default_factory=list)
    install_extension: list[str] = Field(default_factory=list)
    uninstall_extension: list[str] = Field(default_factory=list)
    install_builtin_extension: list[str] = Field(default_factory=list)

    # Passed through to the editor server
    connection_secret: str | None = None
    socket_path: str | None = None
    start_server: bool = False
    print_startup_performance: bool = False
    print_ip_address: bool = False
    disable_websocket_compression: bool = False
    enable_remote_auto_shutdown: bool = False
    remote_auto_shutdown_without_delay: bool = False
    without_browser_env_var: bool = False
    do_not_sync: bool = False
    force_disable_user_env: bool = False
    web_user_data_dir: str | None = None
    use_host_proxy: str | None = None
    enable_sync: bool = False
    github_auth: str | None = None
    logs_path: str | None = None

    def summary(self) -> dict[str, Any]:
        """Option-name keyed view of the set fields with secrets masked."""
        data = redact(self.model_dump(mode="json", by_alias=True, exclude_defaults=True))
        # Nested dataclasses lose default fields under exclude_defaults
        for name in ("cert", "link"):
            optional = getattr(self, name)
            if optional is not None:
                data[name] = optional.value
        return data
