"""Fetch every configured source into the mirror."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional

from skillsync.config.schema import SkillSyncConfig, Source
from skillsync.core.prompt import ConflictPrompter, prompt_conflict_resolution
from skillsync.core.reconcile import StickyDecision, reconcile_local_source
from skillsync.errors import ConfigError, NoUrlError, SourceError
from skillsync.fetch.git import clone_repo
from skillsync.fetch.protocols import Cloner
from skillsync.fetch.remote import fetch_remote_source
from skillsync.utils.logging import get_logger
from skillsync.utils.output import first_line
from skillsync.utils.paths import get_local_store_dir

logger = get_logger("fetch")

FetchStatus = Literal["fetched", "synced", "empty", "skipped", "disabled", "error"]


@dataclass
class FetchOutcome:
    """Result of fetching one source."""

    name: str
    status: FetchStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status != "error"


def fetch_source(
    name: str,
    source: Source,
    store_dir: Path,
    prompt: ConflictPrompter = prompt_conflict_resolution,
    sticky: StickyDecision = StickyDecision.UNSET,
    clone: Cloner = clone_repo,
) -> FetchOutcome:
    """Fetch a single source, turning per-source failures into an outcome."""
    if not source.enabled:
        return FetchOutcome(name, "disabled", "disabled")

    if source.is_local:
        try:
            result = reconcile_local_source(
                Path(source.local_path),
                get_local_store_dir(store_dir),
                prompt,
                sticky,
            )
        except (SourceError, OSError) as e:
            return FetchOutcome(name, "error", first_line(str(e)))

        if result.nothing_to_sync:
            return FetchOutcome(name, "empty", "no skills found")
        for skill_name, message in result.failures:
            logger.warning("%s: failed to copy %s: %s", name, skill_name, message)
        if result.failures and not (result.copied or result.skipped):
            return FetchOutcome(name, "error", result.summary())
        return FetchOutcome(name, "synced", result.summary())

    try:
        fetch_remote_source(name, source, store_dir, clone)
    except NoUrlError:
        return FetchOutcome(name, "skipped", "no URL")
    except (SourceError, OSError) as e:
        return FetchOutcome(name, "error", first_line(str(e)))
    return FetchOutcome(name, "fetched", "fetched")


def run_fetch(
    config: SkillSyncConfig,
    store_dir: Path,
    source_name: Optional[str] = None,
    prompt: ConflictPrompter = prompt_conflict_resolution,
    sticky: StickyDecision = StickyDecision.UNSET,
    clone: Cloner = clone_repo,
    on_outcome: Optional[Callable[[FetchOutcome], None]] = None,
) -> list[FetchOutcome]:
    """Fetch all sources (or one) sequentially in config order.

    Args:
        config: Current configuration
        store_dir: Mirror root
        source_name: Only fetch this source
        prompt: Decision provider for local-source conflicts
        sticky: Initial sticky decision for every local source run
        clone: Clone operation for remote sources
        on_outcome: Called with each outcome as soon as its source is done

    Returns:
        One FetchOutcome per processed source

    Raises:
        ConfigError: If source_name is not configured
    """
    if source_name is not None:
        if source_name not in config.sources:
            raise ConfigError(f'Source "{source_name}" not found')
        sources = {source_name: config.sources[source_name]}
    else:
        sources = config.sources

    outcomes = []
    for name, source in sources.items():
        outcome = fetch_source(name, source, store_dir, prompt, sticky, clone)
        outcomes.append(outcome)
        if on_outcome is not None:
            on_outcome(outcome)
    return outcomes
