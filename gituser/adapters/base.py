"""
Adapter base — the contracts between the resolution engine and the outside.

The engine never shells out or reads the terminal itself. It talks to
a ``ConfigStore`` (git configuration files, addressed explicitly by
path) and, when a human is around, a ``Chooser``.

To add a backend:
    1. Subclass ConfigStore or Chooser
    2. Implement the abstract methods
    3. Pass the instance into the use case
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class ConfigStore(ABC):
    """Key/value access to git configuration files.

    Every read and write names the file it targets, so a write can
    never leak into the global configuration.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier (e.g., 'git', 'mock')."""

    @abstractmethod
    def locate(self, worktree: Path) -> tuple[Path, Path] | None:
        """Find the working copy containing *worktree*.

        Returns:
            (toplevel, git_dir) where ``git_dir / "config"`` is the
            repository's local configuration, or None if *worktree*
            is not inside a git working copy.
        """

    @abstractmethod
    def is_repo(self, git_dir: Path) -> bool:
        """Check whether *git_dir* is valid git metadata."""

    @abstractmethod
    def get(self, key: str, config_file: Path) -> str | None:
        """Read a dotted key (e.g. ``user.name``) from *config_file*."""

    @abstractmethod
    def set(self, key: str, value: str, config_file: Path) -> None:
        """Write a dotted key into *config_file*."""

    @abstractmethod
    def load_remotes(self, config_file: Path) -> dict[str, str]:
        """Return ``{remote name: url}`` from ``remote.<name>.url`` entries."""

    @abstractmethod
    def load_submodules(self, gitmodules_file: Path) -> dict[str, str]:
        """Return ``{submodule name: relative path}`` in declaration order."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class Chooser(ABC):
    """Pick one option out of several, optionally suggesting a default."""

    @abstractmethod
    def choose(
        self,
        options: list[str],
        default: str | None = None,
        title: str = "",
    ) -> str:
        """Return one of *options*."""
