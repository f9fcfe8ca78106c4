"""Distribute mirrored skills to every enabled target.

Targets are not updated incrementally: each enabled target directory is
emptied and then receives a copy of every mirrored skill. When two
sources provide a skill with the same directory name, the one copied
last wins (remote sources in config order, then local).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from skillsync.config.schema import SkillSyncConfig
from skillsync.core.skill import discover_skills
from skillsync.utils.fs import clear_dir, replace_dir
from skillsync.utils.logging import get_logger
from skillsync.utils.output import first_line
from skillsync.utils.paths import ensure_dir

logger = get_logger("sync")

TargetStatus = Literal["synced", "partial", "disabled", "error"]


@dataclass
class TargetOutcome:
    """Result of syncing one target."""

    name: str
    status: TargetStatus
    message: str = ""
    copied: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class SyncReport:
    """Result of a sync run.

    Attributes:
        skill_count: Number of mirrored skills found
        source_count: Number of enabled sources
        targets: Per-target outcomes in config order (empty if no skills)
    """

    skill_count: int = 0
    source_count: int = 0
    targets: list[TargetOutcome] = field(default_factory=list)

    @property
    def no_skills(self) -> bool:
        return self.skill_count == 0


def collect_skill_dirs(config: SkillSyncConfig, store_dir: Path) -> list[Path]:
    """Mirrored skill directories in copy order."""
    return [skill.path for skill in discover_skills(config, store_dir)]


def sync_target(name: str, target_path: Path, skill_dirs: list[Path]) -> TargetOutcome:
    """Replace the contents of one target directory with the given skills."""
    try:
        ensure_dir(target_path)
        clear_dir(target_path)
    except OSError as e:
        return TargetOutcome(name=name, status="error", message=first_line(str(e)))

    outcome = TargetOutcome(name=name, status="synced")
    seen: set[str] = set()
    for skill_dir in skill_dirs:
        if skill_dir.name in seen:
            logger.debug("%s: %s replaces an earlier copy", name, skill_dir)
        seen.add(skill_dir.name)
        try:
            replace_dir(skill_dir, target_path / skill_dir.name)
        except OSError as e:
            outcome.failures.append((skill_dir.name, first_line(str(e))))
            continue
        outcome.copied += 1

    if outcome.failures:
        outcome.status = "partial"
        outcome.message = f"{len(outcome.failures)} skill(s) failed"
    else:
        outcome.message = "synced"
    return outcome


def sync_targets(config: SkillSyncConfig, store_dir: Path) -> SyncReport:
    """Copy every mirrored skill into every enabled target.

    Nothing is touched when the mirror holds no skills. A failing target
    is reported and the remaining targets are still synced.

    Args:
        config: Current configuration
        store_dir: Mirror root

    Returns:
        SyncReport
    """
    skill_dirs = collect_skill_dirs(config, store_dir)
    report = SyncReport(
        skill_count=len(skill_dirs),
        source_count=sum(1 for s in config.sources.values() if s.enabled),
    )
    if not skill_dirs:
        return report

    for name, target in config.targets.items():
        if not target.enabled:
            report.targets.append(TargetOutcome(name=name, status="disabled", message="disabled"))
            continue
        logger.debug("Syncing %d skill(s) to %s", len(skill_dirs), target.path)
        report.targets.append(sync_target(name, Path(target.path), skill_dirs))

    return report
