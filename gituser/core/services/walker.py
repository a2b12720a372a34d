"""
Repository walker — runs identity resolution over a working copy and
all of its submodules.

Each repository gets its own independent pass: parse remotes, match
them against the catalog, resolve, then apply. A submodule without a
match does not affect its parent or siblings, but any visited
directory that is not a git repository aborts the whole walk.

Submodule metadata is found the way git lays it out: the submodule
named ``lib`` of a repository whose git dir is ``.git`` lives in
``.git/modules/lib``, and its own submodules in
``.git/modules/lib/modules/<name>``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from gituser.adapters.base import Chooser, ConfigStore
from gituser.core.errors import NoUnambiguousMatch, NotAGitRepository
from gituser.core.models.outcome import RepositoryPass
from gituser.core.services.applier import apply_identity, local_config
from gituser.core.services.catalog import IdentityCatalog
from gituser.core.services.matcher import ORIGIN, match_remotes
from gituser.core.services.policy import resolve, select
from gituser.core.services.url_parser import parse_remotes

logger = logging.getLogger(__name__)

GITMODULES = ".gitmodules"


@dataclass
class _Level:
    worktree: Path
    git_dir: Path
    display_path: str
    depth: int


class RepositoryWalker:
    """Resolve and apply identities for a repository tree.

    Args:
        store: Config store used for every read and write.
        catalog: Identity catalog, shared read-only across passes.
        chooser: Prompt for ambiguous repositories. None means batch
            mode: ambiguous repositories are skipped.
        origin: Name of the origin remote.
        recurse: Visit submodules.
        dry_run: Resolve only, never write.
        identity: Apply this key everywhere instead of resolving.
    """

    def __init__(
        self,
        store: ConfigStore,
        catalog: IdentityCatalog,
        chooser: Chooser | None = None,
        origin: str = ORIGIN,
        recurse: bool = True,
        dry_run: bool = False,
        identity: str | None = None,
    ):
        self.store = store
        self.catalog = catalog
        self.chooser = chooser
        self.origin = origin
        self.recurse = recurse
        self.dry_run = dry_run
        self.identity = identity

    def walk(self, start: Path) -> Iterator[RepositoryPass]:
        """Yield one RepositoryPass per repository, parents first.

        Raises:
            NotAGitRepository: *start* or a declared submodule is not a
                git repository.
        """
        if self.identity is not None:
            self.catalog.require(self.identity)

        located = self.store.locate(Path(start))
        if located is None:
            raise NotAGitRepository(start)
        toplevel, git_dir = located

        stack = [_Level(toplevel, git_dir, toplevel.name or str(toplevel), 0)]
        while stack:
            level = stack.pop()
            yield self._pass(level)

            if not self.recurse:
                continue
            submodules = self.store.load_submodules(level.worktree / GITMODULES)
            children = [
                _Level(
                    worktree=level.worktree / rel,
                    git_dir=level.git_dir / "modules" / name,
                    display_path=f"{level.display_path}/{rel}",
                    depth=level.depth + 1,
                )
                for name, rel in submodules.items()
            ]
            # reversed so submodules are visited in declaration order
            stack.extend(reversed(children))

    def _pass(self, level: _Level) -> RepositoryPass:
        if not self.store.is_repo(level.git_dir):
            raise NotAGitRepository(level.worktree)

        logger.debug("Resolving %s (%s)", level.display_path, level.git_dir)
        remotes = parse_remotes(self.store.load_remotes(local_config(level.git_dir)))
        match = match_remotes(remotes, self.catalog, origin=self.origin)
        outcome = resolve(len(remotes), match)

        result = RepositoryPass(
            display_path=level.display_path,
            worktree=level.worktree,
            git_dir=level.git_dir,
            depth=level.depth,
            match=match,
            outcome=outcome,
        )

        if self.identity is not None:
            key = self.identity
        else:
            try:
                key = select(
                    outcome,
                    self.catalog.local_key,
                    chooser=None if self.dry_run else self.chooser,
                    title=f"Several identities fit {level.display_path}:",
                )
            except NoUnambiguousMatch as e:
                logger.info("Skipping %s: %s", level.display_path, e)
                result.status = "skipped"
                result.message = str(e)
                return result

        if self.dry_run:
            self.catalog.require(key)
            result.status = "resolved"
            result.message = f"would use {key}"
            return result

        result.identity = apply_identity(key, self.catalog, self.store, level.git_dir)
        result.status = "applied"
        return result
