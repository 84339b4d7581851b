"""
Tests for root directory resolution.

Uses real directory trees under tmp_path.
"""

from pathlib import Path

from grepjump.search.registry import BackendConfig
from grepjump.search.roots import RepositoryMarker, find_marker_root, resolve_working_directory


class TestFindMarkerRoot:

    def test_finds_ancestor_with_marker(self, repo_tree):
        assert find_marker_root(".git", repo_tree / "src" / "pkg") == repo_tree.resolve()

    def test_start_directory_itself(self, repo_tree):
        assert find_marker_root(".git", repo_tree) == repo_tree.resolve()

    def test_marker_must_be_directory(self, tmp_path):
        (tmp_path / ".marker-file").write_text("not a dir")
        assert find_marker_root(".marker-file", tmp_path) is None

    def test_no_marker_returns_none(self, tmp_path):
        assert find_marker_root(".no-such-marker-dir", tmp_path) is None

    def test_defaults_to_cwd(self, repo_tree, monkeypatch):
        monkeypatch.chdir(repo_tree / "src")
        assert find_marker_root(".git") == repo_tree.resolve()


class TestRepositoryMarker:

    def test_inside_and_root(self, repo_tree, monkeypatch):
        monkeypatch.chdir(repo_tree / "src" / "pkg")
        repository = RepositoryMarker(".git")
        assert repository.inside() is True
        assert repository.root() == repo_tree.resolve()

    def test_outside(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        repository = RepositoryMarker(".no-such-marker-dir")
        assert repository.inside() is False
        assert repository.root() is None


class TestResolveWorkingDirectory:

    def test_here_ignores_resolver(self, repo_tree, monkeypatch):
        cwd = repo_tree / "src"
        monkeypatch.chdir(cwd)
        config = BackendConfig(name="x", command="x", root_directory_function=lambda: repo_tree)
        assert resolve_working_directory(config, use_root=False) == Path(cwd)

    def test_root_uses_resolver(self, repo_tree, monkeypatch):
        monkeypatch.chdir(repo_tree / "src")
        config = BackendConfig(name="x", command="x", root_directory_function=lambda: repo_tree)
        assert resolve_working_directory(config, use_root=True) == repo_tree

    def test_root_without_resolver_falls_back_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = BackendConfig(name="ag", command="ag")
        assert resolve_working_directory(config, use_root=True) == Path(tmp_path)

    def test_root_resolver_returning_none_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = BackendConfig(name="x", command="x", root_directory_function=lambda: None)
        assert resolve_working_directory(config, use_root=True) == Path(tmp_path)

    def test_root_resolver_returning_missing_dir_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = BackendConfig(
            name="x", command="x",
            root_directory_function=lambda: str(tmp_path / "gone"),
        )
        assert resolve_working_directory(config, use_root=True) == Path(tmp_path)
