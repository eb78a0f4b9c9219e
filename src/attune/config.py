"""Configuration for the attune agent.

Settings are resolved once per process into an immutable `AgentSettings`.
The CLI feeds `build_settings` from its options (each backed by an
``ATTUNE_*`` environment variable); library callers pass keyword arguments.
Validation happens here, before any cycle starts.
"""

from __future__ import annotations

import re
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from platformdirs import user_state_dir

APP_NAME = "attune"
ENV_PREFIX = "ATTUNE_"  # pragma: no mutate

DEFAULT_CONFIG_TIMEOUT = 120
_DIGITS = re.compile(r"\d+")


class ConfigurationError(Exception):
    """Raised when a setting has an unusable value.

    Attributes:
        setting (str): The name of the offending setting.
    """

    def __init__(self, setting: str, message: str) -> None:
        super().__init__(message)
        self.setting = setting


def parse_timeout(value: Any) -> int:
    """Validate the catalog request timeout.

    Accepts a positive integer or a string of decimal digits.

    Raises:
        ConfigurationError: For any other value.

    Examples:
        >>> parse_timeout("30")
        30
        >>> parse_timeout(5)
        5
    """
    if isinstance(value, bool):
        timeout = None
    elif isinstance(value, int):
        timeout = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value):
        timeout = int(value)
    else:
        timeout = None

    if timeout is None:
        raise ConfigurationError(
            "config_timeout", "Configuration timeout must be an integer"
        )
    if timeout <= 0:
        raise ConfigurationError(
            "config_timeout", "Configuration timeout must be greater than zero"
        )
    return timeout


def default_statedir() -> Path:
    """Default directory for state, caches and reports."""
    return Path(user_state_dir(APP_NAME, appauthor=False))


def default_certname() -> str:
    """The node name used when none is configured."""
    return socket.getfqdn().lower()


@dataclass(frozen=True)
class AgentSettings:  # pylint: disable=too-many-instance-attributes
    """Resolved agent settings.

    Attributes:
        certname: Name of this node; selects the catalog to fetch.
        server: Base URL of the configuration server, or None to work from
            the cache and local catalogs only.
        config_timeout: Seconds to wait for the configuration server.
        use_cache_on_failure: Fall back to the cached catalog when the
            server cannot provide one.
        report: Persist a report after every run.
        summarize: Print the report's metric summary after every run.
        trace: Log tracebacks along with contained errors.
        prerun_command: Command run before each cycle; empty disables it.
        postrun_command: Command run after each cycle; empty disables it.
        statedir: Root directory for everything the agent persists.
        plugin_source: Directory to synchronize plugins from, if any.
        plugin_dest: Where synchronized plugins go; defaults under `statedir`.
    """

    certname: str
    server: str | None = None
    config_timeout: int = DEFAULT_CONFIG_TIMEOUT
    use_cache_on_failure: bool = True
    report: bool = True
    summarize: bool = False
    trace: bool = False
    prerun_command: str = ""
    postrun_command: str = ""
    statedir: Path = field(default_factory=default_statedir)
    plugin_source: Path | None = None
    plugin_dest: Path | None = None

    @property
    def statefile(self) -> Path:
        """SQLite database holding cross-cycle state."""
        return self.statedir / "state.sqlite3"

    @property
    def classfile(self) -> Path:
        """Classes of the last applied catalog."""
        return self.statedir / "classes.txt"

    @property
    def resourcefile(self) -> Path:
        """Resources of the last applied catalog."""
        return self.statedir / "resources.txt"

    @property
    def client_data_dir(self) -> Path:
        """Catalog cache directory."""
        return self.statedir / "client_data" / "catalog"

    @property
    def reportdir(self) -> Path:
        """Directory reports are written to."""
        return self.statedir / "reports"

    @property
    def plugin_dir(self) -> Path:
        """Destination of plugin synchronization."""
        return self.plugin_dest or self.statedir / "plugins"


def _check_server(server: str) -> str:
    parts = urlsplit(server)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ConfigurationError(
            "server", f"Server must be an http(s) URL, not {server!r}"
        )
    return server.rstrip("/")


def build_settings(**options: Any) -> AgentSettings:
    """Build validated settings from keyword options.

    Options that are None are treated as unset and take their defaults.

    Raises:
        ConfigurationError: If a value is invalid.
    """
    values = {name: value for name, value in options.items() if value is not None}
    unknown = set(values) - set(AgentSettings.__dataclass_fields__)
    if unknown:
        raise ConfigurationError(
            sorted(unknown)[0], f"Unknown settings: {', '.join(sorted(unknown))}"
        )

    values.setdefault("certname", default_certname())
    if not values["certname"]:
        raise ConfigurationError("certname", "Certname must not be empty")
    if "config_timeout" in values:
        values["config_timeout"] = parse_timeout(values["config_timeout"])
    if values.get("server"):
        values["server"] = _check_server(values["server"])
    else:
        values.pop("server", None)
    for name in ("statedir", "plugin_source", "plugin_dest"):
        if name in values:
            values[name] = Path(values[name]).expanduser()
    return AgentSettings(**values)
