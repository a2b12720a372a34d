"""Adapters — bindings for the git config store and the terminal prompt.

Public re-exports for convenient access.
"""

from gituser.adapters.base import Chooser, ConfigStore
from gituser.adapters.mock import MockConfigStore, ScriptedChooser

__all__ = [
    "Chooser",
    "ConfigStore",
    "MockConfigStore",
    "ScriptedChooser",
]
