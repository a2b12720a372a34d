"""
Apply use case — one full gituser run.

Ties together settings, the identity catalog, the git config store and
the repository walker. Used by ``gituser apply``, ``gituser status``
and the post-checkout hook.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from gituser.adapters.base import Chooser, ConfigStore
from gituser.core.config.loader import Settings
from gituser.core.errors import GitUserError
from gituser.core.models.outcome import RepositoryPass
from gituser.core.services.catalog import IdentityCatalog, scan_catalog
from gituser.core.services.walker import RepositoryWalker

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Result of one run over a repository tree."""

    catalog_root: Path | None = None
    identity_count: int = 0
    passes: list[RepositoryPass] = field(default_factory=list)
    dry_run: bool = False

    @property
    def applied(self) -> list[RepositoryPass]:
        return [p for p in self.passes if p.status == "applied"]

    @property
    def skipped(self) -> list[RepositoryPass]:
        return [p for p in self.passes if p.status == "skipped"]

    def to_dict(self) -> dict:
        return {
            "catalog_root": str(self.catalog_root) if self.catalog_root else None,
            "identity_count": self.identity_count,
            "dry_run": self.dry_run,
            "repositories": [p.to_dict() for p in self.passes],
            "applied": len(self.applied),
            "skipped": len(self.skipped),
        }


def load_catalog(settings: Settings, identities_dir: Path | str | None = None) -> IdentityCatalog:
    """Scan the configured catalog root."""
    root = settings.catalog_root(identities_dir)
    logger.debug("Identity catalog root: %s", root)
    return scan_catalog(root, local_key=settings.local_identity)


def run_apply(
    path: Path,
    store: ConfigStore,
    settings: Settings | None = None,
    catalog: IdentityCatalog | None = None,
    chooser: Chooser | None = None,
    identity: str | None = None,
    recurse: bool | None = None,
    dry_run: bool = False,
    identities_dir: Path | str | None = None,
) -> ApplyResult:
    """Resolve (and unless *dry_run*, apply) identities under *path*.

    Args:
        path: Directory inside the working copy.
        store: Config store backend.
        settings: Loaded settings (defaults if None).
        catalog: Pre-built catalog; scanned from settings if None.
        chooser: Prompt for ambiguous repositories; None = batch mode.
        identity: Apply this key everywhere instead of resolving.
        recurse: Visit submodules (default from settings).
        dry_run: Resolve without writing.
        identities_dir: Catalog root override.

    Raises:
        GitUserError: On any fatal error. Repositories visited before
            the error keep whatever was written to them, and the error's
            ``partial_result`` lists their passes.
    """
    settings = settings or Settings()
    if catalog is None:
        catalog = load_catalog(settings, identities_dir)

    walker = RepositoryWalker(
        store,
        catalog,
        chooser=chooser,
        origin=settings.origin_remote,
        recurse=settings.recurse_submodules if recurse is None else recurse,
        dry_run=dry_run,
        identity=identity,
    )

    result = ApplyResult(
        catalog_root=catalog.root,
        identity_count=len(catalog),
        dry_run=dry_run,
    )
    try:
        for repo_pass in walker.walk(path):
            result.passes.append(repo_pass)
    except GitUserError as e:
        e.partial_result = result
        raise

    logger.info(
        "%d repositories: %d applied, %d skipped",
        len(result.passes), len(result.applied), len(result.skipped),
    )
    return result
