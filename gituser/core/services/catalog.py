"""
Identity catalog — the local database of known identities.

The catalog root is a directory tree. Every regular file in it is one
identity, named after its key: ``user@authority`` for a forge account
(``jdoe@github.com``) or ``local`` for the fallback. Each file is a
git config fragment::

    [user]
        name = Jane Doe
        email = jane@example.com

Files may be grouped into subdirectories and symlinked in from
elsewhere. Hidden files and directories are ignored.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Iterator, Mapping
from pathlib import Path

from gituser.adapters.base import ConfigStore
from gituser.core.errors import (
    CatalogUnreadable,
    IdentityUnreadable,
    MissingLocalIdentity,
    UnknownIdentity,
)
from gituser.core.models.identity import LOCAL_IDENTITY, Identity, IdentityRecord

logger = logging.getLogger(__name__)


def iter_identity_files(root: Path) -> Iterator[Path]:
    """Yield every non-hidden regular file under *root*, breadth-first.

    Symbolic links are followed. A directory reached a second time
    (through a link loop or two links to the same place) is skipped.
    Entries within a directory come in name order.

    Raises:
        CatalogUnreadable: If *root* itself cannot be listed.
    """
    root = Path(root)
    try:
        root_stat = root.stat()
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except OSError as e:
        raise CatalogUnreadable(root, e.strerror or str(e)) from e

    seen: set[tuple[int, int]] = {(root_stat.st_dev, root_stat.st_ino)}
    queue: deque[list[os.DirEntry[str]]] = deque([entries])

    while queue:
        for entry in queue.popleft():
            if entry.name.startswith("."):
                continue
            try:
                if entry.is_file(follow_symlinks=True):
                    yield Path(entry.path)
                    continue
                if not entry.is_dir(follow_symlinks=True):
                    continue
                st = entry.stat(follow_symlinks=True)
            except OSError as e:
                logger.warning("Skipping unreadable catalog entry %s: %s", entry.path, e)
                continue

            ident = (st.st_dev, st.st_ino)
            if ident in seen:
                logger.warning("Skipping %s: directory already visited (symlink loop?)", entry.path)
                continue
            seen.add(ident)

            try:
                queue.append(sorted(os.scandir(entry.path), key=lambda e: e.name))
            except OSError as e:
                logger.warning("Skipping unreadable catalog directory %s: %s", entry.path, e)


class IdentityCatalog(Mapping[str, IdentityRecord]):
    """Read-only mapping of identity key → IdentityRecord.

    Built once per run and shared by every repository pass.
    """

    def __init__(
        self,
        records: Mapping[str, IdentityRecord] | None = None,
        root: Path | None = None,
        local_key: str = LOCAL_IDENTITY,
    ):
        self._records = dict(records or {})
        self.root = root
        self.local_key = local_key

    def __getitem__(self, key: str) -> IdentityRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"<IdentityCatalog root={str(self.root)!r} identities={len(self)}>"

    @property
    def forge_keys(self) -> list[str]:
        """All keys except the local fallback."""
        return [k for k in self._records if k != self.local_key]

    def require(self, key: str) -> IdentityRecord:
        """Look up *key*, raising the matching error if absent."""
        record = self._records.get(key)
        if record is None:
            if key == self.local_key:
                raise MissingLocalIdentity(key)
            raise UnknownIdentity(key)
        return record

    def load(self, key: str, store: ConfigStore) -> Identity:
        """Read name and email for *key* from its identity file."""
        record = self.require(key)
        name = store.get("user.name", record.source)
        email = store.get("user.email", record.source)
        if not name or not email:
            raise IdentityUnreadable(key, record.source)
        return Identity(key=key, name=name, email=email)


def scan_catalog(root: Path, local_key: str = LOCAL_IDENTITY) -> IdentityCatalog:
    """Scan *root* into an IdentityCatalog.

    When two files share a base name, the one scanned last wins and a
    warning is logged.

    Raises:
        CatalogUnreadable: If the root cannot be scanned. No partial
            catalog is ever returned.
    """
    root = Path(root).expanduser()
    if not root.is_dir():
        raise CatalogUnreadable(root, "not a directory")

    records: dict[str, IdentityRecord] = {}
    for path in iter_identity_files(root):
        key = path.name
        previous = records.get(key)
        if previous is not None:
            logger.warning(
                "Duplicate identity '%s': %s replaces %s", key, path, previous.source
            )
        records[key] = IdentityRecord(key=key, source=path)

    logger.info("Loaded %d identities from %s", len(records), root)
    return IdentityCatalog(records, root=root, local_key=local_key)
