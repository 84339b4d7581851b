"""
grepjump CLI - Console presenter for search-here / search-root.

Usage:
  grepjump here "def main"
  grepjump root "open_file" --jump 3
  grepjump here --word-at src/app.py:12:8
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from .config import build_context
from .search.dispatcher import Dispatcher, SearchRequest
from .search.errors import GrepJumpError
from .search.jump import EditorNavigator, JumpAction
from .utils.helpers import load_settings, symbol_at


class ConsolePresenter:
    """
    Non-interactive presenter: one search for the seed query.

    Prints candidates numbered in arrival order, then optionally jumps
    to the N-th one once the process has finished.
    """

    def __init__(self, jump_index: Optional[int] = None, echo=click.echo):
        self.jump_index = jump_index
        self.echo = echo

    def __call__(self, request: SearchRequest) -> list[str]:
        return asyncio.run(self.present(request))

    async def present(self, request: SearchRequest) -> list[str]:
        candidates: list[str] = []

        handle = await request.start(request.initial_input)
        if handle is None:
            self.echo("No matches (search command unavailable)")
            return candidates

        try:
            async for line in handle.lines():
                display = request.formatter(line)
                if display is None:
                    continue
                candidates.append(line)
                self.echo(f"{len(candidates):>4}  {display}")
            exit_record = await handle.wait()
        finally:
            request.session.close()

        if not candidates:
            self.echo(f"No matches ({exit_record.status})")

        if self.jump_index is not None:
            if self.jump_index > len(candidates):
                raise click.ClickException(
                    f"--jump {self.jump_index}: only {len(candidates)} candidate(s)"
                )
            request.jump(candidates[self.jump_index - 1])

        return candidates


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def parse_position(value: str) -> tuple[str, int, int]:
    """Split FILE:LINE:COL, FILE may itself contain colons."""
    try:
        path, line, column = value.rsplit(":", 2)
        return path, int(line), int(column)
    except ValueError:
        raise click.BadParameter(f"expected FILE:LINE:COL, got {value!r}")


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Settings file (default ~/.config/grepjump/settings.toml)")
@click.option("--verbose", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Search with the best available grep backend and jump to matches."""
    configure_logging(verbose)
    ctx.obj = load_settings(config_path)


def _run(settings: dict, query: str, jump_index: Optional[int],
         word_at: Optional[str], use_root: bool) -> None:
    if word_at:
        path, line, column = parse_position(word_at)
        query = query or symbol_at(path, line, column)

    jump_settings = settings.get("jump", {})
    jump_action = JumpAction(
        EditorNavigator(jump_settings.get("editor", "")),
        clamp_line=jump_settings.get("clamp_line", True),
    )
    dispatcher = Dispatcher(
        build_context(settings),
        ConsolePresenter(jump_index),
        jump_action,
        pre_input=lambda: query,
    )

    try:
        if use_root:
            dispatcher.search_root()
        else:
            dispatcher.search_here()
    except GrepJumpError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("query", required=False, default="")
@click.option("--jump", "jump_index", type=click.IntRange(min=1), help="Open the N-th match")
@click.option("--word-at", help="Use the identifier at FILE:LINE:COL as the query")
@click.pass_obj
def here(settings: dict, query: str, jump_index: Optional[int], word_at: Optional[str]) -> None:
    """Search from the current directory."""
    _run(settings, query, jump_index, word_at, use_root=False)


@main.command()
@click.argument("query", required=False, default="")
@click.option("--jump", "jump_index", type=click.IntRange(min=1), help="Open the N-th match")
@click.option("--word-at", help="Use the identifier at FILE:LINE:COL as the query")
@click.pass_obj
def root(settings: dict, query: str, jump_index: Optional[int], word_at: Optional[str]) -> None:
    """Search from the backend's root directory (e.g. repository root)."""
    _run(settings, query, jump_index, word_at, use_root=True)


if __name__ == "__main__":
    main()
