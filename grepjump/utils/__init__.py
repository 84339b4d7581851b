# grepjump Utilities Package
"""
Shared utility functions and helpers for grepjump.
"""

from .helpers import load_settings, symbol_at

__all__ = ["load_settings", "symbol_at"]
