"""
Backend Selector - Picks the backend to run for a search.

Walks the priority list in order and returns the first backend that is
enabled and whose command resolves on PATH. Nothing is cached: binaries
and repository membership can change between searches.
"""

import shutil

from loguru import logger

from .errors import NoSuitableBackendError
from .registry import BackendConfig, SearchContext


def resolve_command(command: str):
    """Look up ``command`` on PATH. Returns the full path or None."""
    if not command:
        return None
    return shutil.which(command)


def select_backend(context: SearchContext) -> BackendConfig:
    """
    Return the first usable backend in priority order.

    Args:
        context: SearchContext holding the registry and priority list

    Returns:
        The selected BackendConfig

    Raises:
        NoSuitableBackendError: if no backend is both enabled and resolvable
    """
    for name in context.priority:
        config = context.registry.get_config(name)
        if config is None:
            logger.debug(f"Backend '{name}' is not registered, skipping")
            continue

        if not config.is_enabled():
            logger.debug(f"Backend '{name}' is disabled here, skipping")
            continue

        if resolve_command(config.command) is None:
            logger.debug(f"Backend '{name}': '{config.command}' not found on PATH")
            continue

        logger.debug(f"Selected backend '{name}'")
        return config

    raise NoSuitableBackendError(context.priority)
