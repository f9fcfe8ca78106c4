"""Skill models and discovery in the mirror."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from skillsync.config.schema import SkillSyncConfig
from skillsync.utils.fs import list_subdirs
from skillsync.utils.paths import LOCAL_STORE_NAME, get_local_store_dir

_FRONTMATTER = re.compile(r"^---\s*\n(.*?)\n---\s*(\n|$)", re.DOTALL)


@dataclass
class SkillMetadata:
    """Metadata parsed from a skill's SKILL.md frontmatter."""

    name: str
    description: Optional[str] = None
    version: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "SkillMetadata":
        """Create metadata from parsed YAML."""
        data = dict(data)
        name = str(data.pop("name"))
        description = data.pop("description", None)
        version = data.pop("version", None)
        return cls(
            name=name,
            description=str(description) if description is not None else None,
            version=str(version) if version is not None else None,
            extra=data,
        )


def parse_skill_md(skill_md_path: Path) -> Optional[SkillMetadata]:
    """Parse YAML frontmatter from SKILL.md.

    Returns:
        SkillMetadata, or None if the file is missing, unreadable, has no
        frontmatter or the frontmatter has no name
    """
    try:
        content = skill_md_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    match = _FRONTMATTER.match(content)
    if not match:
        return None

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return None
    if not isinstance(data, dict) or "name" not in data:
        return None
    return SkillMetadata.from_yaml(data)


@dataclass
class Skill:
    """A skill directory in the mirror.

    Attributes:
        name: Directory name (the skill identity)
        path: Location in the mirror
        source: Name of the source it came from, or ``local``
        metadata: Parsed SKILL.md frontmatter if present
    """

    name: str
    path: Path
    source: str
    metadata: Optional[SkillMetadata] = None

    @classmethod
    def from_dir(cls, path: Path, source: str) -> "Skill":
        """Build a Skill from a mirrored directory, reading its SKILL.md."""
        return cls(
            name=path.name,
            path=path,
            source=source,
            metadata=parse_skill_md(path / "SKILL.md"),
        )

    @property
    def description(self) -> Optional[str]:
        return self.metadata.description if self.metadata else None


def discover_skills(config: SkillSyncConfig, store_dir: Path) -> list[Skill]:
    """List the mirrored skills of all enabled sources.

    Order: remote sources in config order, then the flat local mirror.
    Within a source, skills are sorted by name. The local mirror is always
    included; it is shared by every local source.
    """
    skills = []
    for name, source in config.sources.items():
        if not source.enabled or source.is_local:
            continue
        for path in list_subdirs(store_dir / name):
            skills.append(Skill.from_dir(path, name))

    for path in list_subdirs(get_local_store_dir(store_dir)):
        skills.append(Skill.from_dir(path, LOCAL_STORE_NAME))

    return skills
