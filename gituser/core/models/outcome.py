"""
Resolution outcome and per-repository pass records.

ResolutionOutcome is the policy's verdict; RepositoryPass is what the
walker reports for every repository it visited.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from gituser.core.models.identity import Identity
from gituser.core.models.remote import MatchResult


class ResolutionOutcome(BaseModel):
    """Result of the resolution policy for one repository.

    kind:
        use_identity  a single identity was chosen (``key`` is set)
        no_remotes    nothing matched; fall back to the local identity
        ambiguous     several candidates; ``default`` may suggest one
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["use_identity", "no_remotes", "ambiguous"]
    key: str | None = None
    candidates: tuple[str, ...] = ()
    default: str | None = None

    @classmethod
    def use(
        cls, key: str, candidates: list[str] | None = None
    ) -> ResolutionOutcome:
        return cls(kind="use_identity", key=key, candidates=tuple(candidates or [key]))

    @classmethod
    def no_remotes(cls) -> ResolutionOutcome:
        return cls(kind="no_remotes")

    @classmethod
    def ambiguous(
        cls, candidates: list[str], default: str | None = None
    ) -> ResolutionOutcome:
        return cls(kind="ambiguous", candidates=tuple(candidates), default=default)

    @property
    def is_ambiguous(self) -> bool:
        return self.kind == "ambiguous"


class RepositoryPass(BaseModel):
    """What happened to one repository (top-level or submodule)."""

    display_path: str
    worktree: Path
    git_dir: Path
    depth: int = 0
    match: MatchResult = Field(default_factory=MatchResult)
    outcome: ResolutionOutcome | None = None
    identity: Identity | None = None
    status: Literal["applied", "resolved", "skipped"] = "skipped"
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "path": self.display_path,
            "git_dir": str(self.git_dir),
            "status": self.status,
            "outcome": self.outcome.kind if self.outcome else None,
            "candidates": list(self.outcome.candidates) if self.outcome else [],
            "identity": self.identity.key if self.identity else None,
            "name": self.identity.name if self.identity else None,
            "email": self.identity.email if self.identity else None,
            "message": self.message,
            "remotes": {
                name: {"authority": r.authority, "user": r.user, "path": r.path}
                for name, r in self.match.remotes.items()
            },
        }
