"""
Root Resolver - Working directory for root-relative searches.

A backend may carry a root-directory-function. When a root search is
requested it is called; a directory result becomes the subprocess
working directory, anything else falls back to the current directory.
"""

import os
from pathlib import Path
from typing import Optional

from loguru import logger

from .registry import BackendConfig


def find_marker_root(marker: str, start=None) -> Optional[Path]:
    """
    Walk upward from ``start`` looking for a directory containing ``marker``.

    Args:
        marker: Name of the marker directory (e.g. ".git")
        start: Directory to start from, defaults to the current directory

    Returns:
        The first ancestor (or ``start`` itself) containing ``marker``,
        or None when the filesystem root is reached without a hit
    """
    current = Path(start if start is not None else os.getcwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / marker).is_dir():
            return directory
    return None


class RepositoryMarker:
    """
    Repository detection by marker directory.

    Instances supply both backend capabilities: ``inside`` as the
    enable-function and ``root`` as the root-directory-function.
    """

    def __init__(self, marker: str = ".git"):
        self.marker = marker

    def inside(self) -> bool:
        return find_marker_root(self.marker) is not None

    def root(self) -> Optional[Path]:
        return find_marker_root(self.marker)

    def __repr__(self):
        return f"RepositoryMarker({self.marker!r})"


def resolve_working_directory(config: BackendConfig, use_root: bool) -> Path:
    """
    Working directory for a search with ``config``.

    Only root searches consult the backend's root-directory-function; a
    missing resolver or a result that is not a directory means the
    current directory.
    """
    cwd = Path(os.getcwd())
    if not use_root or config.root_directory_function is None:
        return cwd

    root = config.root_directory_function()
    if root and Path(root).is_dir():
        return Path(root)

    logger.debug(f"Backend '{config.name}' has no root here, using {cwd}")
    return cwd
