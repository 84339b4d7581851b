"""
ag backend - The Silver Searcher, generic recursive search.

Always enabled and has no root resolver, so root searches run from the
current directory.
"""

from ..registry import BackendConfig

NAME = "ag"
COMMAND = "ag"
ARGUMENTS = "--nocolor --ignore-case --search-zip --nogroup"


def ag_backend() -> BackendConfig:
    return BackendConfig(name=NAME, command=COMMAND, arguments=ARGUMENTS)
