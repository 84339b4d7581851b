"""
Search backends - Built-in backend definitions.

The default priority prefers git grep inside repositories and falls
back to ag everywhere else.
"""

from . import ag, git_grep
from .ag import ag_backend
from .git_grep import git_grep_backend

DEFAULT_PRIORITY = [git_grep.NAME, ag.NAME]


def default_backends() -> list:
    return [git_grep_backend(), ag_backend()]


__all__ = ["DEFAULT_PRIORITY", "default_backends", "ag_backend", "git_grep_backend"]
