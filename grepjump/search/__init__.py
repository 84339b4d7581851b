"""
Search package - Backend selection, process streaming, parsing and jumping.

Provides a backend-agnostic front end for grep-like tools: backends are
checked in priority order and the first usable one is run as an asyncio
subprocess whose PATH:LINE:CONTENT lines become jump targets.
"""

from .dispatcher import Dispatcher, SearchRequest, SearchSession, query_to_pattern
from .errors import GrepJumpError, InvalidCandidateError, NoSuitableBackendError
from .jump import EditorNavigator, JumpAction, Navigator
from .parser import ParsedMatch, format_candidate, parse_line
from .process import ProcessExit, ProcessRunner, SearchProcess, build_argv
from .registry import BackendConfig, BackendRegistry, SearchContext
from .roots import RepositoryMarker, find_marker_root, resolve_working_directory
from .selector import select_backend

__all__ = [
    "BackendConfig",
    "BackendRegistry",
    "Dispatcher",
    "EditorNavigator",
    "GrepJumpError",
    "InvalidCandidateError",
    "JumpAction",
    "Navigator",
    "NoSuitableBackendError",
    "ParsedMatch",
    "ProcessExit",
    "ProcessRunner",
    "RepositoryMarker",
    "SearchContext",
    "SearchProcess",
    "SearchRequest",
    "SearchSession",
    "build_argv",
    "find_marker_root",
    "format_candidate",
    "parse_line",
    "query_to_pattern",
    "resolve_working_directory",
    "select_backend",
]
