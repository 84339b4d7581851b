"""
Shared test fixtures for the grepjump test suite.

Provides settings files, repository trees and source files on disk
(real file I/O, no mocking of the filesystem). Backends run the current
interpreter instead of git or ag, so the suite needs neither installed.
"""

import sys

import pytest
import toml

from grepjump.search.registry import BackendConfig, SearchContext

# Static arguments are split on whitespace, so these one-liners have none.
ECHO_ARGUMENTS = "-c print(__import__('sys').argv[1])"
EXEC_ARGUMENTS = "-c exec(__import__('sys').argv[1])"


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {"priority": ["rg", "git-grep", "ag"]},
        "backends": {
            "rg": {
                "command": "rg",
                "arguments": "--line-number --no-heading --color never",
                "enable": "repository",
                "root": "repository",
                "marker": ".hg",
            },
        },
        "jump": {"editor": "nvim", "clamp_line": False},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


@pytest.fixture
def repo_tree(tmp_path):
    """A repository with a .git marker and a nested working directory."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    nested = root / "src" / "pkg"
    nested.mkdir(parents=True)
    (nested / "module.py").write_text("import os\n\ndef main():\n    return os.getcwd()\n")
    return root


@pytest.fixture
def echo_backend():
    """Backend that prints its extra argument as a single line."""
    return BackendConfig(name="echo", command=sys.executable, arguments=ECHO_ARGUMENTS)


@pytest.fixture
def script_backend():
    """Backend that runs its extra argument as Python code."""
    return BackendConfig(name="script", command=sys.executable, arguments=EXEC_ARGUMENTS)


@pytest.fixture
def echo_context(echo_backend):
    context = SearchContext(priority=["echo"])
    context.registry.add_config("echo", echo_backend)
    return context


@pytest.fixture
def empty_path(monkeypatch, tmp_path):
    """PATH with nothing on it."""
    empty = tmp_path / "empty-bin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return empty


@pytest.fixture
def fake_bin(monkeypatch, tmp_path):
    """PATH holding executable stubs created on demand."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))

    def _make(name):
        exe = bin_dir / name
        exe.write_text("#!/bin/sh\nexit 0\n")
        exe.chmod(0o755)
        return exe

    return _make
