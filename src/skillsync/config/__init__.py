"""Configuration models and persistence."""

from skillsync.config.defaults import DEFAULT_CONFIG, known_targets
from skillsync.config.schema import SkillSyncConfig, Source, Target
from skillsync.config.store import ConfigStore, default_config

__all__ = [
    # Store
    "ConfigStore",
    "default_config",
    # Defaults
    "DEFAULT_CONFIG",
    "known_targets",
    # Schema classes
    "SkillSyncConfig",
    "Source",
    "Target",
]
