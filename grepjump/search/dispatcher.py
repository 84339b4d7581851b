"""
Dispatcher - search-here / search-root entry points.

A dispatch selects the backend, fixes the working directory, asks the
pre-input supplier for a seed query, and hands a SearchRequest to the
presenter. The presenter owns the interactive loop: it calls the
request's process factory each time the query changes, runs the
formatter over every output line, and calls the jump action on confirm.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from loguru import logger

from .jump import JumpAction
from .parser import format_candidate
from .process import ProcessRunner, SearchProcess, Sentinel
from .registry import BackendConfig, SearchContext
from .roots import resolve_working_directory
from .selector import select_backend

WHITESPACE_RUN = re.compile(r"\s+")
WILDCARD = ".*"


def query_to_pattern(query: str) -> str:
    """
    Turn a live query into the backend's extra argument.

    Runs of whitespace become ".*" so "foo bar" finds "foo = bar".
    Everything else passes through untouched, regex metacharacters
    included.
    """
    return WHITESPACE_RUN.sub(WILDCARD, query)


class SearchSession:
    """
    Process factory for one dispatch.

    Each start() supersedes the previous process: its handle is marked
    stale and the OS process terminated, so only the newest search
    feeds the presenter.
    """

    def __init__(self, backend: BackendConfig, directory: Path, runner: ProcessRunner):
        self.backend = backend
        self.directory = directory
        self.runner = runner
        self.current: Optional[SearchProcess] = None
        self.generation = 0

    async def start(self, query: str, sentinel: Optional[Sentinel] = None) -> Optional[SearchProcess]:
        """
        Spawn a search for ``query``, superseding every earlier one.

        Starts may overlap (one per keystroke). A spawn that completes after
        a newer start() began is terminated at once and never becomes current.
        """
        self.generation += 1
        generation = self.generation
        if self.current is not None:
            self.current.terminate()

        handle = await self.runner.start(
            self.backend.command,
            self.backend.arguments,
            query_to_pattern(query),
            cwd=self.directory,
            sentinel=sentinel,
        )

        if generation != self.generation:
            if handle is not None:
                handle.terminate()
            return handle

        if self.current is not None and self.current is not handle:
            self.current.terminate()
        self.current = handle
        return handle

    def is_current(self, handle: Optional[SearchProcess]) -> bool:
        return handle is not None and handle is self.current and not handle.superseded

    def close(self) -> None:
        self.generation += 1
        if self.current is not None:
            self.current.terminate()
            self.current = None


@dataclass
class SearchRequest:
    """Everything a presenter needs to run one interactive search."""
    backend: BackendConfig
    directory: Path
    initial_input: str
    session: SearchSession
    formatter: Callable[[str], Optional[str]]
    jump_action: JumpAction

    async def start(self, query: str, sentinel: Optional[Sentinel] = None) -> Optional[SearchProcess]:
        return await self.session.start(query, sentinel)

    def jump(self, candidate: str) -> Path:
        return self.jump_action(candidate, directory=self.directory)


Presenter = Callable[[SearchRequest], Any]


def _no_pre_input() -> str:
    return ""


class Dispatcher:
    """
    Entry points tying selection, root resolution and the presenter together.

    Args:
        context: SearchContext built at startup
        presenter: Callable receiving the SearchRequest
        jump_action: Shared JumpAction (hooks persist across searches)
        pre_input: Zero-arg supplier of the initial query
        runner: ProcessRunner used by every session
    """

    def __init__(
        self,
        context: SearchContext,
        presenter: Presenter,
        jump_action: JumpAction,
        pre_input: Callable[[], str] = _no_pre_input,
        runner: Optional[ProcessRunner] = None,
    ):
        self.context = context
        self.presenter = presenter
        self.jump_action = jump_action
        self.pre_input = pre_input
        self.runner = runner or ProcessRunner()

    def search_here(self):
        """Search from the current directory."""
        return self._dispatch(use_root=False)

    def search_root(self):
        """Search from the selected backend's root directory."""
        return self._dispatch(use_root=True)

    def prepare(self, use_root: bool) -> SearchRequest:
        """
        Build the SearchRequest without presenting it.

        Raises:
            NoSuitableBackendError: before anything is spawned
        """
        backend = select_backend(self.context)
        directory = resolve_working_directory(backend, use_root)
        initial_input = self.pre_input() or ""
        logger.debug(f"Searching with '{backend.name}' in {directory}")

        return SearchRequest(
            backend=backend,
            directory=directory,
            initial_input=initial_input,
            session=SearchSession(backend, directory, self.runner),
            formatter=format_candidate,
            jump_action=self.jump_action,
        )

    def _dispatch(self, use_root: bool):
        return self.presenter(self.prepare(use_root))
