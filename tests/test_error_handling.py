"""
Tests for error handling across the search core.

Verifies graceful degradation where the design calls for it:
- Unknown backends and properties (absence, never an exception)
- Unparseable output lines (dropped)
- Spawn failures (no handle)
and a hard stop only where it is user-visible:
- No usable backend
- Jumping to a line that is not a match
"""

import pytest

from grepjump.search import (
    BackendRegistry,
    GrepJumpError,
    InvalidCandidateError,
    JumpAction,
    NoSuitableBackendError,
    ProcessRunner,
    SearchContext,
    format_candidate,
)


class TestConfigurationAbsence:

    def test_unknown_backend_everywhere_returns_none(self):
        registry = BackendRegistry()
        assert registry.get_config("ghost") is None
        assert registry.get_property("ghost", "command") is None
        assert registry.set_property("ghost", "command", "x") is None


class TestErrorHierarchy:

    def test_user_visible_errors_share_base(self):
        assert issubclass(NoSuitableBackendError, GrepJumpError)
        assert issubclass(InvalidCandidateError, GrepJumpError)

    def test_candidate_error_keeps_line(self):
        error = InvalidCandidateError("garbage")
        assert error.candidate == "garbage"
        assert "garbage" in str(error)

    def test_no_backend_message_when_nothing_configured(self):
        from grepjump.search import select_backend
        with pytest.raises(NoSuitableBackendError, match="none configured"):
            select_backend(SearchContext())


class TestParseMismatch:

    @pytest.mark.parametrize("line", [
        "Binary file image.png matches",
        "grep: dir: Is a directory",
        "ERR: path not found",
    ])
    def test_informational_lines_dropped(self, line):
        assert format_candidate(line) is None


class TestSpawnFailure:

    @pytest.mark.asyncio
    async def test_vanished_binary_gives_no_handle(self, empty_path):
        runner = ProcessRunner()
        assert await runner.start("ag", "--nogroup", "x") is None


class TestJumpParseFailure:

    def test_nothing_opened(self, tmp_path):
        class Navigator:
            opened = []

            def open_file(self, path):
                self.opened.append(path)

            def goto_line(self, line):
                self.opened.append(line)

        navigator = Navigator()
        with pytest.raises(InvalidCandidateError):
            JumpAction(navigator)("not a match at all", directory=tmp_path)
        assert navigator.opened == []
