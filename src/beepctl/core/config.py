"""Configuration loading and management."""

from __future__ import annotations

import json
import logging
import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from beepctl.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:23373"

CONFIG_DIR = Path.home() / ".config" / "beepctl"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Location used before the rename to beepctl
LEGACY_CONFIG_DIR = Path.home() / ".config" / "beepcli"
LEGACY_CONFIG_FILE = LEGACY_CONFIG_DIR / "config.json"

TOKEN_ENV = "BEEPER_TOKEN"
URL_ENV = "BEEPER_URL"


@dataclass
class BeeperConfig:
    """Loaded configuration.

    ``token``, ``base_url`` and ``aliases`` mirror the config file.
    ``env_token`` and ``env_url`` hold environment overrides captured at
    load time; they are never written back to disk.
    """

    token: str | None = None
    base_url: str | None = None
    aliases: dict[str, str] = field(default_factory=dict)

    env_token: str | None = field(default=None, repr=False)
    env_url: str | None = field(default=None, repr=False)
    _source_path: Path | None = field(default=None, repr=False)

    @property
    def resolved_token(self) -> str | None:
        """Token to send, environment first."""
        return self.env_token or self.token

    @property
    def resolved_base_url(self) -> str:
        """API base URL, environment first, then file, then default."""
        return self.env_url or self.base_url or DEFAULT_BASE_URL

    def to_dict(self) -> dict[str, Any]:
        """Serialize the file-backed fields in config file layout."""
        data: dict[str, Any] = {}
        if self.token:
            data["token"] = self.token
        if self.base_url:
            data["baseUrl"] = self.base_url
        if self.aliases:
            data["aliases"] = dict(self.aliases)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BeeperConfig":
        aliases = data.get("aliases") or {}
        if not isinstance(aliases, dict):
            raise ConfigError("'aliases' must be an object mapping names to chat IDs")
        return cls(
            token=data.get("token") or None,
            base_url=data.get("baseUrl") or None,
            aliases={str(k): str(v) for k, v in aliases.items()},
        )


def get_config_path(path: Path | str | None = None) -> Path:
    """Return the config file in use (explicit path or the default)."""
    return Path(path) if path is not None else CONFIG_FILE


_migration_done = False


def migrate_legacy_config(
    config_file: Path | None = None,
    legacy_file: Path | None = None,
) -> bool:
    """Move a config from ~/.config/beepcli/ to ~/.config/beepctl/.

    Skipped when the new file already exists or there is no legacy file.
    The legacy directory is removed after a successful copy.

    Returns:
        True if a config was migrated.
    """
    config_file = config_file or CONFIG_FILE
    legacy_file = legacy_file or LEGACY_CONFIG_FILE

    if config_file.exists() or not legacy_file.exists():
        return False

    try:
        data = json.loads(legacy_file.read_text())
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(json.dumps(data, indent=2))
        shutil.rmtree(legacy_file.parent)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not migrate legacy config {legacy_file}: {e}")
        return False

    logger.info(f"Migrated config from {legacy_file.parent} to {config_file.parent}")
    return True


def load_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> BeeperConfig:
    """Load configuration from file and environment.

    Args:
        path: Explicit config path or None for ~/.config/beepctl/config.json
        environ: Environment to read overrides from (default: os.environ)

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    global _migration_done

    if environ is None:
        environ = os.environ

    if path is None and not _migration_done:
        _migration_done = True
        migrate_legacy_config()

    config_path = get_config_path(path)

    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
        except ValueError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a JSON object in {config_path}")
        config = BeeperConfig.from_dict(data)
    else:
        config = BeeperConfig()

    config.env_token = environ.get(TOKEN_ENV) or None
    config.env_url = environ.get(URL_ENV) or None
    config._source_path = config_path

    return config


def save_config(config: BeeperConfig, path: Path | str | None = None) -> Path:
    """Write the file-backed part of *config* as JSON.

    Args:
        config: Configuration to save
        path: Target path; defaults to where *config* was loaded from
    """
    if path is None:
        path = config._source_path
    config_path = get_config_path(path)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config.to_dict(), indent=2) + "\n")
    config._source_path = config_path
    logger.debug(f"Saved config to {config_path}")

    return config_path
