"""Core skill comparison, reconciliation and distribution."""

from skillsync.core.compare import directories_equal, hash_tree
from skillsync.core.distributor import SyncReport, sync_targets
from skillsync.core.prompt import (
    ConflictResolution,
    fixed_resolution,
    parse_resolution,
    prompt_conflict_resolution,
)
from skillsync.core.reconcile import ReconcileResult, StickyDecision, reconcile_local_source
from skillsync.core.skill import Skill, SkillMetadata, discover_skills

__all__ = [
    "ConflictResolution",
    "ReconcileResult",
    "Skill",
    "SkillMetadata",
    "StickyDecision",
    "SyncReport",
    "directories_equal",
    "discover_skills",
    "fixed_resolution",
    "hash_tree",
    "parse_resolution",
    "prompt_conflict_resolution",
    "reconcile_local_source",
    "sync_targets",
]
