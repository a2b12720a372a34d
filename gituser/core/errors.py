"""
Error hierarchy — every failure gituser knows how to report.

Core services raise these; the CLI catches ``GitUserError`` at the
edge, prints the message and exits 1. ``NoUnambiguousMatch`` is the
only non-fatal one: the walker turns it into a skipped repository
when running in batch mode.
"""

from __future__ import annotations

from pathlib import Path


class GitUserError(Exception):
    """Base class for all gituser errors.

    ``partial_result`` is set by a run that fails part way through and
    holds what was done to the repositories visited before the error.
    """

    partial_result = None


class NotAGitRepository(GitUserError):
    """A visited directory is not a git working copy."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Not a git repository: {path}")


class CatalogUnreadable(GitUserError):
    """The identity catalog root cannot be scanned."""

    def __init__(self, root: Path | str, reason: str = ""):
        self.root = Path(root)
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Cannot read identity catalog at {root}{detail}")


class MissingLocalIdentity(GitUserError):
    """The fallback identity is needed but not in the catalog."""

    def __init__(self, key: str = "local"):
        self.key = key
        super().__init__(
            f"No '{key}' identity in the catalog; "
            f"create one to use for repositories without known remotes"
        )


class UnknownIdentity(GitUserError):
    """An explicitly requested identity key is not in the catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown identity: {key}")


class IdentityUnreadable(GitUserError):
    """An identity file lacks ``user.name`` or ``user.email``."""

    def __init__(self, key: str, source: Path | str):
        self.key = key
        self.source = Path(source)
        super().__init__(
            f"Identity '{key}' ({source}) must define user.name and user.email"
        )


class NoUnambiguousMatch(GitUserError):
    """Several identities fit and nobody is around to pick one."""

    def __init__(self, candidates: list[str]):
        self.candidates = list(candidates)
        super().__init__(
            "No unambiguous identity among: " + ", ".join(self.candidates)
        )


class ConfigError(GitUserError):
    """Raised when gituser settings are invalid or unreadable."""
