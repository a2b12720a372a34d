"""
Identity applier — writes an identity into a repository's local config.

Only ``user.name`` and ``user.email`` are written, and only to the
repository's own config file (``<git dir>/config``). There is no
rollback: if the email write fails after the name was written, the
repository is left with the new name and the old email.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gituser.adapters.base import ConfigStore
from gituser.core.models.identity import Identity
from gituser.core.services.catalog import IdentityCatalog

logger = logging.getLogger(__name__)


def local_config(git_dir: Path) -> Path:
    """The local configuration file of the repository at *git_dir*."""
    return Path(git_dir) / "config"


def apply_identity(
    key: str,
    catalog: IdentityCatalog,
    store: ConfigStore,
    git_dir: Path,
) -> Identity:
    """Load identity *key* and write it into *git_dir*'s config.

    Raises:
        MissingLocalIdentity / UnknownIdentity: *key* is not in the catalog.
        IdentityUnreadable: the identity file lacks name or email.
    """
    identity = catalog.load(key, store)
    target = local_config(git_dir)
    store.set("user.name", identity.name, target)
    store.set("user.email", identity.email, target)
    logger.info("Applied identity '%s' to %s", key, target)
    return identity
