"""
Remote matcher — correlates a repository's remotes with known identities.

A remote matches an identity when the identity key contains the
remote's authority. Matching is plain substring containment, not
anchored at the ``@``: ``gitlab.com`` also matches a key such as
``me@gitlab.company.org``. Keys that match are annotated with:

    user_match    the key also contains the remote's URL user
    origin_match  the remote is the origin remote

A key is preferred only when the origin remote itself carries a URL
user the key contains. A user hit on one remote and an origin hit on
another do not add up to a preferred match.

A remote with no authority (a local path, a malformed URL) matches
nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from gituser.core.models.remote import MatchAnnotation, MatchResult, RemoteDescriptor

logger = logging.getLogger(__name__)

ORIGIN = "origin"


def match_remotes(
    remotes: Mapping[str, RemoteDescriptor],
    identity_keys: Iterable[str],
    origin: str = ORIGIN,
) -> MatchResult:
    """Match every remote against every identity key.

    Args:
        remotes: Parsed remotes by name.
        identity_keys: Catalog keys, in catalog order.
        origin: Name of the remote that counts as origin.

    Returns:
        MatchResult with the remotes that matched at least one identity
        and the identities that matched at least one remote, both in
        first-match order.
    """
    keys = list(identity_keys)
    result = MatchResult()

    for name, remote in remotes.items():
        if not remote.authority:
            logger.debug("Remote '%s' has no authority: %s", name, remote.url)
            continue

        for key in keys:
            if remote.authority not in key:
                continue

            if name not in result.remotes:
                result.remotes[name] = remote

            ann = result.identities.setdefault(key, MatchAnnotation())
            if remote.user and remote.user in key:
                ann.user_match = True
            if name == origin:
                ann.origin_match = True
                if remote.user and remote.user in key:
                    ann.preferred_match = True

    logger.debug(
        "Matched %d/%d remotes to %d identities",
        len(result.remotes), len(remotes), len(result.identities),
    )
    return result
