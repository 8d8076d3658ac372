"""HeyZub settings file.

Settings unrelated to the server catalog (default model, servers to
activate for a session) live in a small YAML file, looked up in this
order: an explicit path, ``./.heyzub.yaml``, ``~/.heyzub.yaml``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".heyzub.yaml"
CONFIG_DIR_ENV = "HEYZUB_CONFIG_DIR"

DEFAULT_MODEL = "Claude 3.5 Sonnet"


class ConfigError(Exception):
    """The settings file exists but is not valid."""


@dataclass
class HeyzubConfig:
    default_model: str = DEFAULT_MODEL
    active_servers: list[str] = field(default_factory=list)
    source: Optional[Path] = None  # File the settings came from, if any


def find_config_file(explicit: Optional[str | Path] = None) -> Optional[Path]:
    """Return the settings file to use, or None when there is none."""
    if explicit:
        return Path(explicit)
    candidates = [Path.cwd() / CONFIG_FILE_NAME]
    try:
        candidates.append(Path.home() / CONFIG_FILE_NAME)
    except RuntimeError:
        pass
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_config(explicit: Optional[str | Path] = None) -> HeyzubConfig:
    """Load settings, falling back to defaults when no file is found.

    An explicit path that does not exist is an error; a missing file in
    the default locations is not.
    """
    path = find_config_file(explicit)
    if path is None:
        logger.info("No configuration file found. Using defaults.")
        return HeyzubConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Error reading config file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    active = data.get("active_servers") or []
    if isinstance(active, str):
        active = [active]
    if not isinstance(active, list):
        raise ConfigError(f"'active_servers' in {path} must be a list")

    return HeyzubConfig(
        default_model=str(data.get("default_model") or DEFAULT_MODEL),
        active_servers=[str(s) for s in active],
        source=path,
    )


def resolve_registry_dir(option: Optional[str] = None) -> Optional[Path]:
    """Registry directory from ``--config-dir`` or ``$HEYZUB_CONFIG_DIR``.

    None means the registry picks the platform default.
    """
    value = option or os.environ.get(CONFIG_DIR_ENV)
    return Path(value).expanduser() if value else None
