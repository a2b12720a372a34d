"""
Remote models — parsed remote URLs and how they match identities.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RemoteDescriptor(BaseModel):
    """A named remote with its URL decomposed.

    ``user`` is the first path segment of the URL (the forge account),
    ``path`` is what follows it, always starting with ``/``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    user: str | None = None
    authority: str = ""
    path: str = "/"


class MatchAnnotation(BaseModel):
    """Why an identity was considered a candidate.

    user_match:      the identity key contains a matching remote's user.
    origin_match:    at least one matching remote is the origin remote.
    preferred_match: the origin remote itself carries a user contained
                     in the key. Both conditions must hold for the same
                     remote, so user_match and origin_match coming from
                     two different remotes do not make a preferred match.
    """

    user_match: bool = False
    origin_match: bool = False
    preferred_match: bool = False

    @property
    def preferred(self) -> bool:
        return self.preferred_match


class MatchResult(BaseModel):
    """Remote matcher output for one repository."""

    remotes: dict[str, RemoteDescriptor] = Field(default_factory=dict)
    identities: dict[str, MatchAnnotation] = Field(default_factory=dict)

    @property
    def candidates(self) -> list[str]:
        return list(self.identities)

    def preferred(self) -> list[str]:
        """Candidates whose user matches the origin remote's URL user."""
        return [key for key, ann in self.identities.items() if ann.preferred]
