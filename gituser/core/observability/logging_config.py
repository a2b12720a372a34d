"""
Logging configuration — set up once by main.py for the whole process.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this config. Levels are resolved in precedence order:

    --debug  >  --verbose  >  --quiet  >  GITUSER_LOG_LEVEL  >  WARNING

GITUSER_LOG_FILE adds a file log (level from GITUSER_LOG_FILE_LEVEL,
or the console level). When gituser runs as a git hook its console
lines are prefixed so they stand out in git's own output.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "GITUSER_LOG_LEVEL"
FILE_ENV = "GITUSER_LOG_FILE"
FILE_LEVEL_ENV = "GITUSER_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

_FMT_MINIMAL = "%(message)s"
_FMT_HOOK = "gituser: %(message)s"

_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_SHORT = "%H:%M:%S"

_FMT_FILE = _FMT_DEBUG
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Turn the global CLI flags into a level name."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LEVEL_ENV, "").strip() or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    hook: bool = False,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file. Defaults to GITUSER_LOG_FILE.
        log_file_level: Optional separate level for the log file.
        hook: Prefix console lines with ``gituser:``.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_SHORT
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_SHORT
    else:
        fmt, datefmt = (_FMT_HOOK if hook else _FMT_MINIMAL), None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    effective_level = numeric_level

    log_file = log_file or os.environ.get(FILE_ENV) or None
    log_file_level = log_file_level or os.environ.get(FILE_LEVEL_ENV) or None
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
