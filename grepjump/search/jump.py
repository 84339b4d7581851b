"""
Jump Action - Navigate to a selected search candidate.

Order on every call:
  1. pre-jump hooks (registration order)
  2. parse the raw candidate line
  3. open the file, move to the line
  4. post-jump hooks (registration order)

Hooks take no arguments; they work on whatever editor state they
captured themselves (e.g. pushing the current position on a mark stack).
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Optional, Protocol

from loguru import logger

from .errors import InvalidCandidateError
from .parser import parse_line

Hook = Callable[[], None]


class Navigator(Protocol):
    """Editor side of a jump."""

    def open_file(self, path: Path) -> None:
        ...

    def goto_line(self, line: int) -> None:
        ...


class EditorNavigator:
    """
    Navigator that opens matches in a terminal editor.

    Uses the ``+LINE FILE`` convention understood by vi, vim, nvim, nano,
    emacs, micro and kakoune.
    """

    def __init__(self, editor: str = ""):
        self.editor = editor or os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"
        self.current_file: Optional[Path] = None

    def open_file(self, path: Path) -> None:
        self.current_file = Path(path)

    def goto_line(self, line: int) -> None:
        if self.current_file is None:
            logger.warning("goto_line called before open_file, ignoring")
            return

        argv = [*self.editor.split(), f"+{line}", str(self.current_file)]
        if shutil.which(argv[0]) is None:
            logger.warning(f"Editor '{argv[0]}' not found, cannot open {self.current_file}")
            return

        try:
            subprocess.run(argv, check=False)
        except OSError:
            logger.exception(f"Failed to launch editor: {argv}")


def count_lines(path: Path) -> Optional[int]:
    """Number of lines in ``path``, or None if it cannot be read."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError:
        return None
    if not data:
        return 0
    return data.count(b"\n") + (0 if data.endswith(b"\n") else 1)


class JumpAction:
    """
    Opens the file/line named by a candidate, wrapped in ordered hooks.

    Line numbers are 1-indexed like grep output. With ``clamp_line`` a
    line past the end of the file lands on the last line.
    """

    def __init__(self, navigator: Navigator, clamp_line: bool = True):
        self.navigator = navigator
        self.clamp_line = clamp_line
        self.pre_hooks: list[Hook] = []
        self.post_hooks: list[Hook] = []

    def add_pre_hook(self, hook: Hook) -> None:
        self.pre_hooks.append(hook)

    def remove_pre_hook(self, hook: Hook) -> bool:
        return _remove(self.pre_hooks, hook)

    def add_post_hook(self, hook: Hook) -> None:
        self.post_hooks.append(hook)

    def remove_post_hook(self, hook: Hook) -> bool:
        return _remove(self.post_hooks, hook)

    def __call__(self, candidate: str, directory=None) -> Path:
        """
        Jump to ``candidate``.

        Args:
            candidate: Raw backend output line as selected by the user
            directory: Directory relative match paths resolve against,
                defaults to the current directory

        Returns:
            Path of the opened file

        Raises:
            InvalidCandidateError: candidate is not PATH:LINE:CONTENT;
                nothing is opened and post-hooks do not run
        """
        for hook in list(self.pre_hooks):
            hook()

        match = parse_line(candidate)
        if match is None:
            logger.warning(f"Not a search match: {candidate[:80]!r}")
            raise InvalidCandidateError(candidate)

        path = Path(match.file_path)
        if not path.is_absolute():
            path = Path(directory if directory is not None else os.getcwd()) / path

        line = max(1, match.line_number)
        if self.clamp_line:
            line = self._clamp(path, line)

        self.navigator.open_file(path)
        self.navigator.goto_line(line)

        for hook in list(self.post_hooks):
            hook()

        return path

    def _clamp(self, path: Path, line: int) -> int:
        total = count_lines(path)
        if total is None:
            return line
        last = max(1, total)
        if line > last:
            logger.debug(f"{path} has {total} lines, clamping line {line} to {last}")
            return last
        return line


def _remove(hooks: list[Hook], hook: Hook) -> bool:
    try:
        hooks.remove(hook)
    except ValueError:
        return False
    return True
