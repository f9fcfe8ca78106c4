"""Reconcile a local source directory into the shared local mirror.

Each immediate subdirectory of the source is a skill. For every skill:

- not yet in the mirror: copied
- identical to the mirrored copy: skipped without asking
- different: resolved by the sticky decision if one was made earlier in
  the run, otherwise by asking the prompter

Answering "yes-all" or "no-all" makes the decision sticky for every
remaining conflict of the run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from skillsync.core.compare import directories_equal
from skillsync.core.prompt import ConflictPrompter, ConflictResolution
from skillsync.errors import SourceMissingError
from skillsync.utils.fs import list_subdirs, replace_dir
from skillsync.utils.logging import get_logger
from skillsync.utils.output import first_line
from skillsync.utils.paths import ensure_dir

logger = get_logger("reconcile")


class StickyDecision(str, Enum):
    """Run-scoped decision applied to conflicts without prompting."""

    UNSET = "unset"
    YES_ALL = "yes-all"
    NO_ALL = "no-all"


class ConflictState:
    """Holds the sticky decision for one reconciliation run.

    The state only moves from UNSET to YES_ALL or NO_ALL, never back.
    """

    def __init__(self, sticky: StickyDecision = StickyDecision.UNSET):
        self.sticky = sticky
        self.prompts = 0

    def resolve(self, skill_name: str, prompt: ConflictPrompter) -> bool:
        """Decide a conflict.

        Args:
            skill_name: Conflicting skill
            prompt: Asked only while no sticky decision is set

        Returns:
            True to overwrite the mirrored copy, False to keep it
        """
        if self.sticky is StickyDecision.YES_ALL:
            return True
        if self.sticky is StickyDecision.NO_ALL:
            return False

        self.prompts += 1
        answer = prompt(skill_name)

        if answer == ConflictResolution.YES_ALL:
            self.sticky = StickyDecision.YES_ALL
            return True
        if answer == ConflictResolution.NO_ALL:
            self.sticky = StickyDecision.NO_ALL
            return False
        return answer == ConflictResolution.YES


@dataclass
class ReconcileResult:
    """Outcome of reconciling one local source.

    Attributes:
        copied: Skills copied or overwritten
        skipped: Skills left untouched (identical or declined)
        failures: (skill name, error message) for skills whose copy failed
        prompts: Number of times the prompter was asked
        nothing_to_sync: True if the source has no skill directories
    """

    copied: int = 0
    skipped: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)
    prompts: int = 0
    nothing_to_sync: bool = False

    def summary(self) -> str:
        """Human-readable summary such as ``"2 copied, 1 skipped"``."""
        parts = []
        if self.copied:
            parts.append(f"{self.copied} copied")
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        if self.failures:
            parts.append(f"{len(self.failures)} failed")
        return ", ".join(parts)


def reconcile_local_source(
    source_dir: Path,
    mirror_dir: Path,
    prompt: ConflictPrompter,
    sticky: StickyDecision = StickyDecision.UNSET,
) -> ReconcileResult:
    """Copy the skills of a local source into the mirror.

    Args:
        source_dir: Local source directory (one subdirectory per skill)
        mirror_dir: Flat mirror directory shared by all local sources
        prompt: Decision provider for conflicting skills
        sticky: Initial sticky decision (set for batch runs)

    Returns:
        ReconcileResult with per-run counts

    Raises:
        SourceMissingError: If source_dir does not exist
    """
    source_dir = Path(source_dir)
    mirror_dir = Path(mirror_dir)

    if not source_dir.is_dir():
        raise SourceMissingError(f"Local path does not exist: {source_dir}")

    result = ReconcileResult()
    candidates = list_subdirs(source_dir)
    if not candidates:
        result.nothing_to_sync = True
        return result

    ensure_dir(mirror_dir)
    state = ConflictState(sticky)

    for candidate in candidates:
        skill_name = candidate.name
        mirrored = mirror_dir / skill_name

        if mirrored.exists():
            if directories_equal(candidate, mirrored):
                logger.debug("%s: unchanged", skill_name)
                result.skipped += 1
                continue

            if not state.resolve(skill_name, prompt):
                logger.debug("%s: conflict kept", skill_name)
                result.skipped += 1
                continue

            logger.debug("%s: conflict overwritten", skill_name)
        else:
            logger.debug("%s: new", skill_name)

        try:
            replace_dir(candidate, mirrored)
        except OSError as e:
            logger.debug("%s: copy failed: %s", skill_name, e)
            result.failures.append((skill_name, first_line(str(e))))
            continue

        result.copied += 1

    result.prompts = state.prompts
    return result
