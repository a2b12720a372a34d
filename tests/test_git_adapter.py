"""
Tests for the git-backed config store, against real repositories.
"""

import shutil
import subprocess
from pathlib import Path

import pytest

from gituser.adapters.vcs.git import GitConfigStore
from gituser.core.errors import GitUserError
from gituser.core.services.catalog import scan_catalog
from gituser.core.use_cases.apply import run_apply

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(*args: str, cwd: Path) -> str:
    return subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True,
    ).stdout


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    path.mkdir()
    _git("init", "-q", cwd=path)
    return path


class TestGitConfigStore:
    def test_locate(self, repo: Path):
        (repo / "src").mkdir()
        toplevel, git_dir = GitConfigStore().locate(repo / "src")
        assert toplevel.resolve() == repo.resolve()
        assert git_dir.resolve() == (repo / ".git").resolve()

    def test_locate_outside_repo(self, tmp_path: Path):
        outside = tmp_path / "plain"
        outside.mkdir()
        assert GitConfigStore().locate(outside) is None

    def test_is_repo(self, repo: Path, tmp_path: Path):
        store = GitConfigStore()
        assert store.is_repo(repo / ".git")
        assert not store.is_repo(tmp_path / "nothing")

    def test_remotes_with_dotted_names(self, repo: Path):
        _git("remote", "add", "origin", "git@github.com:jdoe/x.git", cwd=repo)
        _git("remote", "add", "my.fork", "https://gitlab.com/johnd/x", cwd=repo)
        remotes = GitConfigStore().load_remotes(repo / ".git" / "config")
        assert remotes == {
            "origin": "git@github.com:jdoe/x.git",
            "my.fork": "https://gitlab.com/johnd/x",
        }

    def test_no_remotes(self, repo: Path):
        assert GitConfigStore().load_remotes(repo / ".git" / "config") == {}

    def test_set_and_get_local_only(self, repo: Path):
        store = GitConfigStore()
        config = repo / ".git" / "config"
        store.set("user.name", "Jane Doe", config)
        assert store.get("user.name", config) == "Jane Doe"
        assert _git("config", "--local", "user.name", cwd=repo).strip() == "Jane Doe"

    def test_get_missing(self, repo: Path):
        assert GitConfigStore().get("user.email", repo / ".git" / "config") is None

    def test_set_failure(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(GitUserError):
            GitConfigStore().set("user.name", "x", blocker / "config")

    def test_submodules(self, tmp_path: Path):
        gitmodules = tmp_path / ".gitmodules"
        gitmodules.write_text(
            '[submodule "lib"]\n\tpath = vendor/lib\n\turl = ../lib.git\n'
            '[submodule "docs"]\n\tpath = docs\n\turl = ../docs.git\n'
        )
        assert GitConfigStore().load_submodules(gitmodules) == {
            "lib": "vendor/lib", "docs": "docs",
        }

    def test_submodules_missing_file(self, tmp_path: Path):
        assert GitConfigStore().load_submodules(tmp_path / ".gitmodules") == {}


class TestEndToEnd:
    def test_apply_to_real_repository(self, repo: Path, tmp_path: Path):
        ids = tmp_path / "ids"
        ids.mkdir()
        (ids / "jdoe@github.com").write_text(
            "[user]\n\tname = John Doe\n\temail = jdoe@example.com\n"
        )
        (ids / "local").write_text("[user]\n\tname = Local\n\temail = local@localhost\n")
        _git("remote", "add", "origin", "git@github.com:jdoe/x.git", cwd=repo)

        store = GitConfigStore()
        result = run_apply(repo, store, catalog=scan_catalog(ids))

        assert [p.status for p in result.passes] == ["applied"]
        assert _git("config", "--local", "user.email", cwd=repo).strip() == "jdoe@example.com"
