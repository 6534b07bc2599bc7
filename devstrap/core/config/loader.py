"""
Settings loader — reads the optional devstrap config file.

The file is optional: with no file every setting has its default and
the run behaves like the stock provisioning script. Lookup order:

    $DEVSTRAP_CONFIG  >  ~/.config/devstrap/config.yml
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ValidationError

from devstrap.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DEVSTRAP_CONFIG"
DEFAULT_CONFIG_PATH = Path(".config") / "devstrap" / "config.yml"

__all__ = ["ConfigError", "Settings", "find_settings_file", "load_settings"]


class Settings(BaseModel):
    """User-tunable knobs of a run."""

    fetch_strategy: Literal["archive", "git"] = "archive"
    starship_preset: str | None = None
    log_level: str | None = None
    log_file: str | None = None


def find_settings_file(environ: Mapping[str, str], home: Path) -> Path | None:
    """Locate the settings file, or None when there is none.

    An explicit ``$DEVSTRAP_CONFIG`` is returned even if it does not
    exist, so a typo surfaces as an error instead of silent defaults.
    """
    explicit = environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    candidate = home / DEFAULT_CONFIG_PATH
    if candidate.is_file():
        return candidate
    return None


def load_settings(path: Path | None) -> Settings:
    """Load and validate settings.

    Args:
        path: Settings file, or None for defaults.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s (fetch_strategy=%s)", path, settings.fetch_strategy)
    return settings
