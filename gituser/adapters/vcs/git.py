"""
Git adapter — configuration access through the git CLI.

Every operation targets an explicit file with ``git config --file``,
so nothing is ever read from or written to the global configuration
by accident. Uses the git binary, never a reimplementation of its
config format.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from gituser.adapters.base import ConfigStore
from gituser.core.errors import GitUserError

logger = logging.getLogger(__name__)


def run_git(
    *args: str,
    cwd: Path | None = None,
    timeout: int = 15,
) -> subprocess.CompletedProcess[str]:
    """Run a git command and return the result."""
    logger.debug("git %s", " ".join(args))
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
        timeout=timeout,
    )


class GitConfigStore(ConfigStore):
    """ConfigStore backed by the ``git`` executable."""

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def locate(self, worktree: Path) -> tuple[Path, Path] | None:
        worktree = Path(worktree)
        if not worktree.is_dir():
            return None
        r = run_git("rev-parse", "--show-toplevel", "--git-common-dir", cwd=worktree)
        if r.returncode != 0:
            return None
        lines = r.stdout.splitlines()
        if len(lines) < 2:
            return None
        toplevel = Path(lines[0])
        git_dir = Path(lines[1])
        # --git-common-dir may be relative to the directory git ran in
        if not git_dir.is_absolute():
            git_dir = (worktree / git_dir).resolve()
        return toplevel, git_dir

    def is_repo(self, git_dir: Path) -> bool:
        if not Path(git_dir).is_dir():
            return False
        r = run_git(f"--git-dir={git_dir}", "rev-parse", "--git-dir")
        return r.returncode == 0

    def get(self, key: str, config_file: Path) -> str | None:
        r = run_git("config", "--file", str(config_file), "--get", key)
        if r.returncode != 0:
            return None
        value = r.stdout.rstrip("\n")
        return value or None

    def set(self, key: str, value: str, config_file: Path) -> None:
        r = run_git("config", "--file", str(config_file), key, value)
        if r.returncode != 0:
            raise GitUserError(
                f"Failed to set {key} in {config_file}: "
                f"{r.stderr.strip() or f'exit code {r.returncode}'}"
            )
        logger.info("Set %s=%s in %s", key, value, config_file)

    def load_remotes(self, config_file: Path) -> dict[str, str]:
        return self._section_values(config_file, "remote", "url")

    def load_submodules(self, gitmodules_file: Path) -> dict[str, str]:
        if not Path(gitmodules_file).is_file():
            return {}
        return self._section_values(gitmodules_file, "submodule", "path")

    # ── Helpers ─────────────────────────────────────────────────

    def _section_values(self, config_file: Path, section: str, leaf: str) -> dict[str, str]:
        """Collect ``<section>.<name>.<leaf>`` entries as ``{name: value}``.

        Subsection names may contain dots, so the name is whatever sits
        between the section prefix and the leaf suffix.
        """
        pattern = rf"^{section}\..*\.{leaf}$"
        r = run_git(
            "config", "--file", str(config_file), "--null", "--get-regexp", pattern,
        )
        # exit code 1 just means no matching keys
        if r.returncode != 0:
            return {}

        prefix, suffix = f"{section}.", f".{leaf}"
        values: dict[str, str] = {}
        for entry in r.stdout.split("\0"):
            if not entry:
                continue
            key, _, value = entry.partition("\n")
            if key.startswith(prefix) and key.endswith(suffix):
                values[key[len(prefix):-len(suffix)]] = value
        return values
