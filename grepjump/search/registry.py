"""
Backend Registry - Named search backend configurations.

Each backend is a BackendConfig record stored under a unique name. The
registry also exposes a property-bag view (get_property/set_property)
keyed by the configuration surface names:

  command                  executable name, looked up on PATH at selection
  arguments                static flags, split on whitespace
  enable-function          zero-arg predicate, backend eligible when true
  root-directory-function  zero-arg resolver returning a root path or None

Any other key lands in the config's open-ended ``extra`` mapping.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


@dataclass
class BackendConfig:
    """Configuration of a single search backend."""
    name: str
    command: str
    arguments: str = ""
    enable_function: Optional[Callable[[], bool]] = None
    root_directory_function: Optional[Callable[[], Any]] = None
    extra: dict = field(default_factory=dict)

    def is_enabled(self) -> bool:
        if self.enable_function is None:
            return True
        return bool(self.enable_function())


# Property key -> BackendConfig attribute
PROPERTY_FIELDS = {
    "command": "command",
    "arguments": "arguments",
    "enable-function": "enable_function",
    "root-directory-function": "root_directory_function",
}


def config_from_properties(name: str, properties: dict) -> BackendConfig:
    """Build a BackendConfig from a property bag keyed by surface names."""
    config = BackendConfig(name=name, command=properties.get("command", ""))
    for key, value in properties.items():
        if key == "command":
            continue
        _assign(config, key, value)
    return config


def _assign(config: BackendConfig, key: str, value: Any) -> None:
    attr = PROPERTY_FIELDS.get(key)
    if attr is None:
        config.extra[key] = value
    else:
        setattr(config, attr, value)


class BackendRegistry:
    """
    Registry of backend configurations keyed by name.

    Re-adding a name replaces the previous configuration entirely, no
    property of the old entry survives. Access is serialized with a lock
    so configuration may be updated from another thread between searches.
    """

    def __init__(self):
        self._configs: dict[str, BackendConfig] = {}
        self._lock = threading.Lock()

    def add_config(self, name: str, config) -> BackendConfig:
        """
        Add or replace the backend stored under ``name``.

        Args:
            name: Backend name
            config: BackendConfig, or a property bag (dict) keyed by
                surface names ("command", "arguments", ...)

        Returns:
            The stored BackendConfig
        """
        if isinstance(config, BackendConfig):
            stored = BackendConfig(
                name=name,
                command=config.command,
                arguments=config.arguments,
                enable_function=config.enable_function,
                root_directory_function=config.root_directory_function,
                extra=dict(config.extra),
            )
        else:
            stored = config_from_properties(name, dict(config))

        with self._lock:
            self._configs[name] = stored
        return stored

    def get_config(self, name: str) -> Optional[BackendConfig]:
        with self._lock:
            return self._configs.get(name)

    def get_property(self, name: str, key: str) -> Any:
        """Return a single property, or None for unknown names or keys."""
        with self._lock:
            config = self._configs.get(name)
            if config is None:
                return None
            attr = PROPERTY_FIELDS.get(key)
            if attr is None:
                return config.extra.get(key)
            return getattr(config, attr)

    def set_property(self, name: str, key: str, value: Any) -> Optional[BackendConfig]:
        """
        Write a single property. Unknown keys are added to the bag.

        Returns:
            The updated BackendConfig, or None if ``name`` is unknown
        """
        with self._lock:
            config = self._configs.get(name)
            if config is None:
                return None
            _assign(config, key, value)
            return config

    def names(self) -> list[str]:
        with self._lock:
            return list(self._configs)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._configs

    def __len__(self) -> int:
        with self._lock:
            return len(self._configs)


@dataclass
class SearchContext:
    """Registry plus the ordered backend priority list, built once at startup."""
    registry: BackendRegistry = field(default_factory=BackendRegistry)
    priority: list[str] = field(default_factory=list)
