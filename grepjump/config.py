"""
grepjump configuration - SearchContext construction.

The context is built once at startup: built-in backends first, then
[backends.<name>] tables from settings.toml. A table under an existing
name replaces that backend entirely.

Capabilities are named in TOML since functions cannot be:

  enable = "repository"   only inside a repository (marker directory)
  root   = "repository"   root searches start at the repository root
"""

from typing import Any, Dict

from loguru import logger

from .search.backends import DEFAULT_PRIORITY, default_backends
from .search.registry import BackendConfig, SearchContext, config_from_properties
from .search.roots import RepositoryMarker

CAPABILITY_KEYS = {"enable", "root", "marker"}
KNOWN_CAPABILITIES = {"repository"}


def default_context() -> SearchContext:
    """Context with the built-in backends in default priority."""
    context = SearchContext(priority=list(DEFAULT_PRIORITY))
    for backend in default_backends():
        context.registry.add_config(backend.name, backend)
    return context


def build_context(settings: Dict[str, Any]) -> SearchContext:
    """
    Build a SearchContext from loaded settings.

    Args:
        settings: Output of utils.helpers.load_settings()

    Returns:
        SearchContext with built-ins, user backends and priority applied
    """
    context = default_context()

    for name, table in settings.get("backends", {}).items():
        backend = backend_from_table(name, table)
        if backend is not None:
            context.registry.add_config(name, backend)

    priority = settings.get("search", {}).get("priority") or []
    if priority:
        if not isinstance(priority, list):
            logger.warning(f"search.priority must be a list, got {priority!r}; using defaults")
        else:
            context.priority = [str(name) for name in priority]

    for name in context.priority:
        if name not in context.registry:
            logger.warning(f"Backend '{name}' is in search.priority but not defined")

    return context


def backend_from_table(name: str, table) -> BackendConfig | None:
    """
    Convert a [backends.<name>] table into a BackendConfig.

    Malformed tables (not a table, no command) are skipped with a warning.
    """
    if not isinstance(table, dict) or not table.get("command"):
        logger.warning(f"Skipping malformed backend '{name}': missing 'command' field")
        return None

    properties = {k: v for k, v in table.items() if k not in CAPABILITY_KEYS}
    backend = config_from_properties(name, properties)

    repository = RepositoryMarker(table.get("marker", ".git"))
    enable = table.get("enable")
    root = table.get("root")

    if enable is not None:
        if enable in KNOWN_CAPABILITIES:
            backend.enable_function = repository.inside
        else:
            logger.warning(f"Backend '{name}': unknown enable capability '{enable}', ignoring")

    if root is not None:
        if root in KNOWN_CAPABILITIES:
            backend.root_directory_function = repository.root
        else:
            logger.warning(f"Backend '{name}': unknown root capability '{root}', ignoring")

    return backend
