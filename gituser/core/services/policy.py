"""
Resolution policy — decides which identity a repository should use.

Evaluated once per repository:

    no remotes                       → no_remotes (use the local identity)
    remotes, none matching           → no_remotes
    exactly one candidate identity   → use it, whatever its flags
    exactly one preferred candidate  → use it
      (matches the remote user AND sits on origin)
    anything else                    → ambiguous

An ambiguous outcome becomes a prompt when a Chooser is available,
otherwise a NoUnambiguousMatch error.
"""

from __future__ import annotations

import logging

from gituser.adapters.base import Chooser
from gituser.core.errors import NoUnambiguousMatch
from gituser.core.models.outcome import ResolutionOutcome
from gituser.core.models.remote import MatchResult

logger = logging.getLogger(__name__)


def resolve(remote_count: int, match: MatchResult) -> ResolutionOutcome:
    """Apply the policy to one repository's matcher output."""
    if remote_count == 0:
        logger.debug("No remotes configured")
        return ResolutionOutcome.no_remotes()

    candidates = match.candidates
    if not match.remotes or not candidates:
        logger.debug("None of %d remotes matches a known identity", remote_count)
        return ResolutionOutcome.no_remotes()

    if len(candidates) == 1:
        return ResolutionOutcome.use(candidates[0])

    preferred = match.preferred()
    if len(preferred) == 1:
        return ResolutionOutcome.use(preferred[0], candidates)

    default = preferred[0] if preferred else None
    return ResolutionOutcome.ambiguous(candidates, default=default)


def select(
    outcome: ResolutionOutcome,
    local_key: str,
    chooser: Chooser | None = None,
    title: str = "",
) -> str:
    """Turn an outcome into the identity key to apply.

    Raises:
        NoUnambiguousMatch: If the outcome is ambiguous and there is
            no chooser (batch mode).
    """
    if outcome.kind == "no_remotes":
        return local_key
    if outcome.kind == "use_identity":
        assert outcome.key is not None
        return outcome.key

    candidates = list(outcome.candidates)
    if chooser is None:
        raise NoUnambiguousMatch(candidates)
    return chooser.choose(candidates, default=outcome.default, title=title)
