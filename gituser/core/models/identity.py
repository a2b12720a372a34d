"""
Identity models — catalog entries and the name/email they resolve to.

A catalog entry only knows where its identity lives. The actual
name and email are read from the source file when the identity is
applied, never during the scan.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

LOCAL_IDENTITY = "local"


class Identity(BaseModel):
    """A commit identity: what ends up in ``user.name`` / ``user.email``."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    email: str


class IdentityRecord(BaseModel):
    """One identity file found in the catalog.

    ``key`` is the file's base name: ``user@authority`` for a forge
    account, or ``local`` for the fallback identity.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    source: Path

    @property
    def is_local(self) -> bool:
        return self.key == LOCAL_IDENTITY
