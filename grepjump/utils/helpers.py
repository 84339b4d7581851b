"""
Helper utilities for grepjump.

Provides:
- Settings loading (TOML over built-in defaults)
- Pre-input helpers (identifier under a file position)
"""

import re
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

SETTINGS_PATH = Path.home() / ".config" / "grepjump" / "settings.toml"

IDENTIFIER = re.compile(r"[A-Za-z0-9_]+")


def default_settings() -> Dict[str, Any]:
    """Built-in settings. Backend definitions live in search.backends."""
    return {
        "search": {
            "priority": [],
        },
        "backends": {},
        "jump": {
            "editor": "",
            "clamp_line": True,
        },
    }


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a TOML file merged over the defaults.

    Args:
        path: Settings file, defaults to ~/.config/grepjump/settings.toml

    Returns:
        Dictionary containing settings with defaults applied

    Example settings structure:
        {
            "search": {"priority": ["git-grep", "ag"]},
            "backends": {
                "rg": {"command": "rg", "arguments": "--vimgrep"}
            },
            "jump": {"editor": "nvim", "clamp_line": True}
        }
    """
    defaults = default_settings()
    settings_path = Path(path) if path is not None else SETTINGS_PATH

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return defaults

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def symbol_at(path, line: int, column: int) -> str:
    """
    Identifier under a 1-indexed line/column in a file.

    Used as search pre-input. Returns "" when the position is outside the
    file or not on an identifier.
    """
    try:
        lines = Path(path).read_text(errors="replace").splitlines()
    except OSError as e:
        logger.warning(f"Cannot read {path} for pre-input: {e}")
        return ""

    if not 1 <= line <= len(lines):
        return ""

    text = lines[line - 1]
    offset = column - 1
    for m in IDENTIFIER.finditer(text):
        if m.start() <= offset < m.end():
            return m.group(0)
    return ""
