"""
git grep backend - Repository-aware search.

Only enabled inside a git work tree; root searches run from the
repository root (the nearest ancestor holding ".git").
"""

from ..registry import BackendConfig
from ..roots import RepositoryMarker

NAME = "git-grep"
COMMAND = "git"
ARGUMENTS = "--no-pager grep --line-number --no-color"


def git_grep_backend(marker: str = ".git") -> BackendConfig:
    repository = RepositoryMarker(marker)
    return BackendConfig(
        name=NAME,
        command=COMMAND,
        arguments=ARGUMENTS,
        enable_function=repository.inside,
        root_directory_function=repository.root,
    )
