"""gituser — per-repository git identity selection."""

__version__ = "0.1.0"
