"""Refresh the mirror entry of a remote source.

Remote content is authoritative: the mirror entry is always replaced by a
fresh shallow clone, never compared. The existing entry is only removed
once the new checkout is known to be usable, so a failed clone or a
missing subdirectory leaves the previous mirror intact.
"""

import shutil
from pathlib import Path

from skillsync.config.schema import Source
from skillsync.errors import NoUrlError, SubdirNotFoundError
from skillsync.fetch.git import clone_repo
from skillsync.fetch.protocols import Cloner
from skillsync.utils.fs import make_staging_dir, move_dir, remove_path
from skillsync.utils.logging import get_logger
from skillsync.utils.paths import ensure_dir

logger = get_logger("fetch")


def fetch_remote_source(
    name: str,
    source: Source,
    store_dir: Path,
    clone: Cloner = clone_repo,
) -> Path:
    """Clone a remote source and promote it into the mirror.

    Args:
        name: Source name (``owner/repo``), also the mirror entry path
        source: Source configuration
        store_dir: Mirror root
        clone: Clone operation

    Returns:
        Path of the refreshed mirror entry

    Raises:
        NoUrlError: If the source has no URL
        CloneError: If the clone fails
        SubdirNotFoundError: If ``source.subdir`` is absent from the clone
    """
    if not source.url:
        raise NoUrlError(name)

    target_dir = store_dir / name
    ensure_dir(target_dir.parent)

    staging = make_staging_dir(store_dir)
    try:
        checkout = staging / "repo"
        clone(source.url, checkout)

        if source.subdir:
            promoted = checkout / source.subdir
            if not promoted.is_dir():
                raise SubdirNotFoundError(source.subdir)
        else:
            promoted = checkout
            remove_path(checkout / ".git")

        logger.debug("Promoting %s to %s", promoted, target_dir)
        move_dir(promoted, target_dir)
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    return target_dir
