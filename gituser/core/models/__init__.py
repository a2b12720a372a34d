"""
Domain models — Pydantic types for identity resolution.

All models are re-exported here for convenient access:

    from gituser.core.models import IdentityRecord, RemoteDescriptor, ResolutionOutcome
"""

from gituser.core.models.identity import Identity, IdentityRecord
from gituser.core.models.outcome import RepositoryPass, ResolutionOutcome
from gituser.core.models.remote import MatchAnnotation, MatchResult, RemoteDescriptor

__all__ = [
    # identity.py
    "Identity",
    "IdentityRecord",
    # remote.py
    "MatchAnnotation",
    "MatchResult",
    "RemoteDescriptor",
    # outcome.py
    "RepositoryPass",
    "ResolutionOutcome",
]
