"""
Configuration loader — resolves gituser settings.

Settings come from an optional YAML file validated against a Pydantic
schema. The identity catalog root is resolved in precedence order:

    --identities option  >  GITUSER_IDENTITIES env var  >
    identities_dir in config.yml  >  ~/.config/gituser/identities
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from gituser.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "GITUSER_CONFIG"
IDENTITIES_ENV = "GITUSER_IDENTITIES"

DEFAULT_CONFIG_DIR = Path("~/.config/gituser")
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yml"
DEFAULT_IDENTITIES_DIR = DEFAULT_CONFIG_DIR / "identities"


class Settings(BaseModel):
    """User settings, loaded from config.yml."""

    identities_dir: Path | None = None
    local_identity: str = "local"
    origin_remote: str = "origin"
    recurse_submodules: bool = True

    def catalog_root(self, override: Path | str | None = None) -> Path:
        """Resolve the identity catalog root directory."""
        return resolve_identities_dir(override, self)


def find_config_file(explicit: Path | str | None = None) -> Path | None:
    """Locate the settings file.

    Args:
        explicit: Path given on the command line, if any.

    Returns:
        Path to config.yml, or None if no settings file exists.
    """
    if explicit:
        return Path(explicit).expanduser()

    from_env = os.environ.get(CONFIG_ENV, "").strip()
    if from_env:
        return Path(from_env).expanduser()

    default = DEFAULT_CONFIG_FILE.expanduser()
    return default if default.is_file() else None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    A missing default settings file is not an error: defaults apply.
    An explicitly named file must exist.

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    config_path = find_config_file(path)
    if config_path is None:
        logger.debug("No settings file, using defaults")
        return Settings()

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    logger.debug("Loading settings from %s", config_path)

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {config_path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e

    logger.info("Loaded settings from %s", config_path)
    return settings


def resolve_identities_dir(
    override: Path | str | None = None,
    settings: Settings | None = None,
) -> Path:
    """Pick the identity catalog root. An empty env var counts as unset."""
    if override:
        return Path(override).expanduser()

    from_env = os.environ.get(IDENTITIES_ENV, "").strip()
    if from_env:
        return Path(from_env).expanduser()

    if settings is not None and settings.identities_dir:
        return settings.identities_dir.expanduser()

    return DEFAULT_IDENTITIES_DIR.expanduser()
