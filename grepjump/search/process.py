"""
Process Runner - Spawns search backends as asyncio subprocesses.

The argument vector is the resolved command, then each whitespace token
of the static argument string, then the per-call extra argument as one
element. The extra argument comes from the live query and is never
split, whatever whitespace it contains.

Output is exposed line by line through SearchProcess.lines(). A sentinel
callback fires exactly once when the process is gone (finished, killed,
or superseded by a newer search).
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from .selector import resolve_command

# StreamReader line limit; match lines from minified files get long
STREAM_LIMIT = 1024 * 1024

_EOF = object()


@dataclass
class ProcessExit:
    """Final state of a search process, reported to the sentinel."""
    returncode: Optional[int]
    superseded: bool = False

    @property
    def status(self) -> str:
        if self.superseded:
            return "superseded"
        if self.returncode is None:
            return "unknown"
        if self.returncode < 0:
            return f"killed by signal {-self.returncode}"
        if self.returncode == 0:
            return "finished"
        return f"exited abnormally with code {self.returncode}"


Sentinel = Callable[["SearchProcess", ProcessExit], None]


def build_argv(command_path: str, arguments: str, extra_argument: str) -> list[str]:
    """
    Build the argument vector for a backend invocation.

    Example:
        build_argv("/usr/bin/ag", "--a --b", "x y")
        -> ["/usr/bin/ag", "--a", "--b", "x y"]
    """
    return [command_path, *arguments.split(), extra_argument]


class SearchProcess:
    """
    Handle on one running backend process.

    A pump task owns stdout: it reads every line (so the backend never
    blocks on a full pipe, even when abandoned), hands lines to lines()
    consumers while the handle is current, then reaps the process and
    fires the sentinel.
    """

    def __init__(self, process, argv: list[str], cwd=None, sentinel: Optional[Sentinel] = None):
        self.process = process
        self.argv = argv
        self.cwd = cwd
        self.superseded = False
        self.exit: Optional[ProcessExit] = None

        self._sentinel = sentinel
        self._sentinel_fired = False
        self._queue: asyncio.Queue = asyncio.Queue()
        self._pump_task = asyncio.get_running_loop().create_task(self._pump())

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def done(self) -> bool:
        return self.exit is not None

    async def lines(self):
        """Yield output lines in emission order until EOF or supersession."""
        while True:
            line = await self._queue.get()
            if line is _EOF:
                # leave the marker for any later lines() call
                self._queue.put_nowait(_EOF)
                return
            if self.superseded:
                return
            yield line

    async def wait(self) -> ProcessExit:
        """Wait for the process to end and return its exit record."""
        await asyncio.shield(self._pump_task)
        return self.exit

    def terminate(self) -> None:
        """
        Mark this handle superseded and stop the OS process if it is alive.

        Remaining output is discarded and pending lines() consumers return.
        """
        if self.superseded:
            return
        self.superseded = True
        self._queue.put_nowait(_EOF)

        if self.process.returncode is None:
            try:
                self.process.terminate()
            except ProcessLookupError:
                logger.debug(f"Search process {self.pid} already exited")

    async def _pump(self):
        stream = self.process.stdout
        try:
            while True:
                try:
                    raw = await stream.readline()
                except ValueError:
                    logger.warning(f"Dropped over-long output line from {self.argv[0]}")
                    continue
                if not raw:
                    break
                if not self.superseded:
                    self._queue.put_nowait(
                        raw.decode("utf-8", errors="replace").rstrip("\r\n")
                    )
            returncode = await self.process.wait()
            self.exit = ProcessExit(returncode, superseded=self.superseded)
        finally:
            if self.exit is None:
                self.exit = ProcessExit(self.process.returncode, superseded=self.superseded)
            self._queue.put_nowait(_EOF)
            self._fire_sentinel()

    def _fire_sentinel(self):
        if self._sentinel_fired:
            return
        self._sentinel_fired = True
        logger.debug(f"Search process {self.pid}: {self.exit.status}")
        if self._sentinel is not None:
            try:
                self._sentinel(self, self.exit)
            except Exception:
                logger.exception(f"Sentinel failed for search process {self.pid}")


class ProcessRunner:
    """Spawns backend processes. Counts spawns for diagnostics."""

    def __init__(self, resolver: Callable[[str], Optional[str]] = resolve_command):
        self.resolver = resolver
        self.spawn_count = 0

    async def start(
        self,
        command: str,
        arguments: str,
        extra_argument: str,
        cwd=None,
        sentinel: Optional[Sentinel] = None,
    ) -> Optional[SearchProcess]:
        """
        Spawn ``command`` with its static arguments and the extra argument.

        Args:
            command: Executable name, resolved on PATH now
            arguments: Static flag string, split on whitespace
            extra_argument: Dynamic argument, passed as a single element
            cwd: Working directory for the process
            sentinel: Called once with (handle, ProcessExit) on termination

        Returns:
            SearchProcess handle, or None if the command is unavailable
        """
        command_path = self.resolver(command)
        if command_path is None:
            logger.warning(f"Search command '{command}' is no longer on PATH")
            return None

        argv = build_argv(command_path, arguments, extra_argument)
        logger.debug(f"Spawning {argv} in {cwd or '.'}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
                cwd=None if cwd is None else str(cwd),
                limit=STREAM_LIMIT,
            )
        except OSError as e:
            logger.warning(f"Failed to spawn {command_path}: {e}")
            return None

        self.spawn_count += 1
        return SearchProcess(process, argv, cwd, sentinel)
