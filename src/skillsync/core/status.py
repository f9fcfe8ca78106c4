"""Status of the mirror and the targets."""

from dataclasses import dataclass, field
from pathlib import Path

from skillsync.config.schema import SkillSyncConfig
from skillsync.core.compare import directories_equal
from skillsync.core.distributor import collect_skill_dirs
from skillsync.utils.fs import list_subdirs
from skillsync.utils.paths import get_local_store_dir


@dataclass
class SourceStatus:
    name: str
    kind: str
    enabled: bool
    fetched: bool
    skill_count: int


@dataclass
class TargetStatus:
    name: str
    path: str
    enabled: bool
    exists: bool
    skill_count: int
    in_sync: bool


@dataclass
class StatusReport:
    sources: list[SourceStatus] = field(default_factory=list)
    targets: list[TargetStatus] = field(default_factory=list)
    skill_count: int = 0


def _source_status(name: str, source, store_dir: Path) -> SourceStatus:
    if source.is_local:
        local_store = get_local_store_dir(store_dir)
        names = {p.name for p in list_subdirs(Path(source.local_path))}
        mirrored = [p for p in list_subdirs(local_store) if p.name in names]
        return SourceStatus(
            name=name,
            kind="local",
            enabled=source.enabled,
            fetched=bool(mirrored),
            skill_count=len(mirrored),
        )

    mirror = store_dir / name
    return SourceStatus(
        name=name,
        kind="remote",
        enabled=source.enabled,
        fetched=mirror.is_dir(),
        skill_count=len(list_subdirs(mirror)),
    )


def _target_in_sync(target_path: Path, expected: dict[str, Path]) -> bool:
    installed = {p.name: p for p in list_subdirs(target_path)}
    if set(installed) != set(expected):
        return False
    return all(directories_equal(expected[n], installed[n]) for n in expected)


def build_status(config: SkillSyncConfig, store_dir: Path) -> StatusReport:
    """Summarize what has been fetched and whether targets match the mirror.

    A target is in sync when it holds exactly the mirrored skill names and
    every one of them is identical to the copy a sync would install.
    """
    report = StatusReport()
    for name, source in config.sources.items():
        report.sources.append(_source_status(name, source, store_dir))

    # later entries win, as in a sync
    expected = {p.name: p for p in collect_skill_dirs(config, store_dir)}
    report.skill_count = len(expected)

    for name, target in config.targets.items():
        path = Path(target.path)
        exists = path.is_dir()
        report.targets.append(
            TargetStatus(
                name=name,
                path=target.path,
                enabled=target.enabled,
                exists=exists,
                skill_count=len(list_subdirs(path)) if exists else 0,
                in_sync=exists and _target_in_sync(path, expected),
            )
        )
    return report
