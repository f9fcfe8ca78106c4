"""JSON-backed configuration store.

The store is the single source of truth for sources and targets. Every
mutating operation reads the whole document, modifies it, and writes it
back (last writer wins, no locking).
"""

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from skillsync.config.defaults import DEFAULT_CONFIG, known_targets
from skillsync.config.schema import SkillSyncConfig, Source, Target
from skillsync.errors import ConfigError
from skillsync.utils.logging import get_logger
from skillsync.utils.paths import CONFIG_FILENAME, ensure_dir, expand_user

logger = get_logger("config")


def default_config() -> SkillSyncConfig:
    """Build a fresh copy of the built-in default configuration."""
    return SkillSyncConfig.model_validate(copy.deepcopy(DEFAULT_CONFIG))


class ConfigStore:
    """Reads and writes ``config.json`` inside the config directory."""

    def __init__(self, config_dir: Path):
        """Initialize the store.

        Args:
            config_dir: Directory holding config.json (also the mirror root)
        """
        self.config_dir = Path(config_dir)
        self.config_path = self.config_dir / CONFIG_FILENAME

    @property
    def store_dir(self) -> Path:
        """Root of the fetched skill mirror."""
        return self.config_dir

    def exists(self) -> bool:
        """Check whether the config file has been created."""
        return self.config_path.exists()

    def read(self) -> SkillSyncConfig:
        """Load the configuration.

        Creates the file with defaults if it does not exist. A file that
        cannot be read, parsed or validated yields the defaults without
        being rewritten.

        Returns:
            The current configuration
        """
        ensure_dir(self.config_dir)

        if not self.config_path.exists():
            config = default_config()
            self.write(config)
            return config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return SkillSyncConfig.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.info("Ignoring unreadable config %s: %s", self.config_path, e)
            return default_config()

    def write(self, config: SkillSyncConfig) -> None:
        """Persist the full configuration.

        The document is written to a temporary file in the same directory
        and renamed over config.json.
        """
        ensure_dir(self.config_dir)

        fd, tmp_name = tempfile.mkstemp(
            prefix=".config.", suffix=".json", dir=self.config_dir
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config.to_json_dict(), f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.config_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def add_source(
        self,
        name: str,
        url: Optional[str] = None,
        subdir: Optional[str] = None,
        local_path: Optional[str] = None,
    ) -> Source:
        """Add a new enabled source.

        Raises:
            ConfigError: If a source with this name already exists
        """
        config = self.read()
        if name in config.sources:
            raise ConfigError(f'Source "{name}" already exists')

        source = Source(url=url, subdir=subdir, local_path=local_path, enabled=True)
        config.sources[name] = source
        self.write(config)
        return source

    def remove_source(self, name: str) -> None:
        """Remove a source.

        Raises:
            ConfigError: If the source does not exist
        """
        config = self.read()
        if name not in config.sources:
            raise ConfigError(f'Source "{name}" not found')

        del config.sources[name]
        self.write(config)

    def set_source_enabled(self, name: str, enabled: bool) -> None:
        """Enable or disable a source.

        Raises:
            ConfigError: If the source does not exist
        """
        config = self.read()
        if name not in config.sources:
            raise ConfigError(f'Source "{name}" not found')

        config.sources[name].enabled = enabled
        self.write(config)

    def add_target(self, name: str, path: Optional[str] = None) -> Target:
        """Add a new enabled target.

        Args:
            name: Target name
            path: Target directory; defaults to the known location for ``name``

        Raises:
            ConfigError: If the target exists, or ``name`` is unknown and no
                path was given
        """
        config = self.read()
        if name in config.targets:
            raise ConfigError(f'Target "{name}" already exists')

        target_path = os.path.abspath(expand_user(path)) if path else known_targets().get(name)
        if not target_path:
            raise ConfigError(f'Unknown target "{name}". Please provide a path.')

        target = Target(path=target_path, enabled=True)
        config.targets[name] = target
        self.write(config)
        return target

    def remove_target(self, name: str) -> None:
        """Remove a target.

        Raises:
            ConfigError: If the target does not exist
        """
        config = self.read()
        if name not in config.targets:
            raise ConfigError(f'Target "{name}" not found')

        del config.targets[name]
        self.write(config)

    def set_target_enabled(self, name: str, enabled: bool) -> None:
        """Enable or disable a target.

        Raises:
            ConfigError: If the target does not exist
        """
        config = self.read()
        if name not in config.targets:
            raise ConfigError(f'Target "{name}" not found')

        config.targets[name].enabled = enabled
        self.write(config)
