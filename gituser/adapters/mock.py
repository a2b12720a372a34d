"""
Mock adapters — in-memory test doubles for the config store and prompt.

``MockConfigStore`` keeps every config file as a flat dict keyed by
resolved path; repositories are declared with ``add_repo``.
``ScriptedChooser`` answers prompts from a fixed script.
"""

from __future__ import annotations

from pathlib import Path

from gituser.adapters.base import Chooser, ConfigStore


class MockConfigStore(ConfigStore):
    """In-memory ConfigStore.

    Every ``set`` call is recorded in ``writes`` so tests can assert
    exactly what would have reached disk.
    """

    def __init__(self) -> None:
        self._files: dict[Path, dict[str, str]] = {}
        self._repos: dict[Path, Path] = {}
        self._git_dirs: set[Path] = set()
        self._writes: list[tuple[Path, str, str]] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def writes(self) -> list[tuple[Path, str, str]]:
        """All (file, key, value) triples written so far."""
        return self._writes

    # ── Fixture helpers ─────────────────────────────────────────

    def add_repo(
        self,
        worktree: Path,
        git_dir: Path | None = None,
        remotes: dict[str, str] | None = None,
    ) -> Path:
        """Declare a repository and its remotes. Returns its git dir."""
        worktree = Path(worktree)
        git_dir = Path(git_dir) if git_dir else worktree / ".git"
        self._repos[worktree] = git_dir
        self._git_dirs.add(git_dir)
        config = self._files.setdefault(git_dir / "config", {})
        for remote, url in (remotes or {}).items():
            config[f"remote.{remote}.url"] = url
        return git_dir

    def add_git_dir(self, git_dir: Path, remotes: dict[str, str] | None = None) -> Path:
        """Declare submodule metadata without a registered worktree."""
        git_dir = Path(git_dir)
        self._git_dirs.add(git_dir)
        config = self._files.setdefault(git_dir / "config", {})
        for remote, url in (remotes or {}).items():
            config[f"remote.{remote}.url"] = url
        return git_dir

    def add_submodules(self, gitmodules_file: Path, paths: dict[str, str]) -> None:
        """Declare ``submodule.<name>.path`` entries in a .gitmodules file."""
        config = self._files.setdefault(Path(gitmodules_file), {})
        for sub, rel in paths.items():
            config[f"submodule.{sub}.path"] = rel

    def add_file(self, path: Path, values: dict[str, str]) -> None:
        """Declare an arbitrary config file (e.g. an identity file)."""
        self._files.setdefault(Path(path), {}).update(values)

    def file(self, path: Path) -> dict[str, str]:
        return dict(self._files.get(Path(path), {}))

    # ── ConfigStore ─────────────────────────────────────────────

    def locate(self, worktree: Path) -> tuple[Path, Path] | None:
        worktree = Path(worktree)
        for candidate in (worktree, *worktree.parents):
            if candidate in self._repos:
                return candidate, self._repos[candidate]
        return None

    def is_repo(self, git_dir: Path) -> bool:
        return Path(git_dir) in self._git_dirs

    def get(self, key: str, config_file: Path) -> str | None:
        return self._files.get(Path(config_file), {}).get(key)

    def set(self, key: str, value: str, config_file: Path) -> None:
        self._writes.append((Path(config_file), key, value))
        self._files.setdefault(Path(config_file), {})[key] = value

    def load_remotes(self, config_file: Path) -> dict[str, str]:
        return _section_values(self._files.get(Path(config_file), {}), "remote", "url")

    def load_submodules(self, gitmodules_file: Path) -> dict[str, str]:
        return _section_values(
            self._files.get(Path(gitmodules_file), {}), "submodule", "path"
        )


def _section_values(values: dict[str, str], section: str, leaf: str) -> dict[str, str]:
    prefix, suffix = f"{section}.", f".{leaf}"
    return {
        key[len(prefix):-len(suffix)]: value
        for key, value in values.items()
        if key.startswith(prefix) and key.endswith(suffix)
    }


class ScriptedChooser(Chooser):
    """Chooser that replays pre-recorded answers.

    An answer of ``None`` accepts the offered default. Every prompt is
    logged in ``calls`` as (options, default).
    """

    def __init__(self, answers: list[str | None] | None = None):
        self._answers = list(answers or [])
        self._calls: list[tuple[list[str], str | None]] = []

    @property
    def calls(self) -> list[tuple[list[str], str | None]]:
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    def choose(
        self,
        options: list[str],
        default: str | None = None,
        title: str = "",
    ) -> str:
        self._calls.append((list(options), default))
        answer = self._answers.pop(0) if self._answers else None
        if answer is None:
            if default is None:
                raise AssertionError(f"No scripted answer for {options}")
            return default
        if answer not in options:
            raise AssertionError(f"Scripted answer {answer!r} not in {options}")
        return answer
