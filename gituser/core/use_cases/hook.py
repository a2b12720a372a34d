"""
Post-checkout hook — fresh-clone detection and hook installation.

git runs ``post-checkout <previous HEAD> <new HEAD> <branch flag>``.
On the checkout that ends a ``git clone`` the previous HEAD is the
null object id, which is the only time gituser acts as a hook.
"""

from __future__ import annotations

import logging
import stat
from dataclasses import dataclass
from pathlib import Path

from gituser.adapters.base import ConfigStore
from gituser.core.errors import GitUserError, NotAGitRepository
from gituser.core.services.applier import local_config

logger = logging.getLogger(__name__)

HOOK_NAME = "post-checkout"

# SHA-1 and SHA-256 repositories
NULL_OIDS = frozenset({"0" * 40, "0" * 64})

HOOK_SCRIPT = """\
#!/bin/sh
# Installed by gituser: pick a commit identity for freshly cloned repositories.
exec gituser hook run "$@"
"""


def is_fresh_checkout(previous_head: str) -> bool:
    """True when *previous_head* is the null object id."""
    return previous_head.strip() in NULL_OIDS


@dataclass
class HookInstallResult:
    path: Path
    replaced: bool = False

    def to_dict(self) -> dict:
        return {"path": str(self.path), "replaced": self.replaced}


def hooks_dir_for(store: ConfigStore, path: Path) -> Path:
    """Hooks directory of the repository containing *path*.

    Honours ``core.hooksPath``, relative values being relative to the
    top of the working copy, as git treats them.
    """
    located = store.locate(path)
    if located is None:
        raise NotAGitRepository(path)
    toplevel, git_dir = located

    custom = store.get("core.hooksPath", local_config(git_dir))
    if custom:
        hooks = Path(custom).expanduser()
        return hooks if hooks.is_absolute() else toplevel / hooks
    return git_dir / "hooks"


def install_hook(hooks_dir: Path, force: bool = False) -> HookInstallResult:
    """Write the post-checkout shim into *hooks_dir*.

    Raises:
        GitUserError: If a different hook already exists and *force*
            is not set.
    """
    hooks_dir = Path(hooks_dir)
    target = hooks_dir / HOOK_NAME
    replaced = False

    if target.exists():
        if target.read_text(encoding="utf-8", errors="replace") == HOOK_SCRIPT:
            logger.info("Hook already installed at %s", target)
            return HookInstallResult(path=target)
        if not force:
            raise GitUserError(f"{target} already exists (use --force to replace it)")
        replaced = True

    hooks_dir.mkdir(parents=True, exist_ok=True)
    target.write_text(HOOK_SCRIPT, encoding="utf-8")
    mode = target.stat().st_mode
    target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    logger.info("Installed %s hook at %s", HOOK_NAME, target)
    return HookInstallResult(path=target, replaced=replaced)
