"""Filesystem helpers for all-or-nothing skill copies."""

import os
import shutil
import tempfile
from pathlib import Path

from skillsync.utils.paths import ensure_dir

# Prefix of temporary directories created next to mirror and target entries
STAGING_PREFIX = ".skillsync-tmp-"


def is_staging_name(name: str) -> bool:
    """Check whether a directory name is a (possibly leftover) staging area."""
    return name.startswith(STAGING_PREFIX)


def make_staging_dir(parent: Path) -> Path:
    """Create an empty staging directory inside ``parent``."""
    ensure_dir(parent)
    return Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=parent))


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree if it exists."""
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
    elif path.exists():
        shutil.rmtree(path)


def is_within(path: str, root: str) -> bool:
    """Check whether normalized ``path`` is ``root`` or lies below it."""
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


def anchor_escaping_symlinks(source: Path, copy: Path) -> None:
    """Make relative symlinks of ``copy`` that leave ``source`` absolute.

    ``copy`` is a symlink-preserving copy of ``source``. A relative link such
    as ``REF.md -> ../shared.md`` would dangle once the tree lives somewhere
    else, so it is re-pointed at the absolute path it resolved to in
    ``source``. Links that stay inside the tree, absolute links and dangling
    links are left as they are.
    """
    source_root = os.path.normpath(os.path.abspath(source))
    for dirpath, dirnames, filenames in os.walk(copy):
        rel_dir = os.path.relpath(dirpath, copy)
        for name in dirnames + filenames:
            link = os.path.join(dirpath, name)
            if not os.path.islink(link):
                continue
            target = os.readlink(link)
            if os.path.isabs(target):
                continue
            original_dir = os.path.normpath(os.path.join(source_root, rel_dir))
            resolved = os.path.normpath(os.path.join(original_dir, target))
            if is_within(resolved, source_root):
                continue
            os.unlink(link)
            os.symlink(resolved, link)


def replace_dir(source: Path, dest: Path) -> None:
    """Copy ``source`` to ``dest``, replacing anything already at ``dest``.

    The tree is first copied into a staging sibling of ``dest`` and only
    swapped in once the copy completed, so ``dest`` is never left holding a
    partial copy. Symlinks are kept as links; relative ones that point
    outside ``source`` are made absolute so the copy resolves to the same
    files.

    Raises:
        OSError: If the copy fails; ``dest`` is left as it was
    """
    staging = make_staging_dir(dest.parent)
    staged = staging / dest.name
    try:
        shutil.copytree(source, staged, symlinks=True)
        anchor_escaping_symlinks(source, staged)
        remove_path(dest)
        staged.rename(dest)
    finally:
        shutil.rmtree(staging, ignore_errors=True)


def move_dir(source: Path, dest: Path) -> None:
    """Move ``source`` to ``dest``, replacing anything already at ``dest``."""
    ensure_dir(dest.parent)
    remove_path(dest)
    shutil.move(str(source), str(dest))


def clear_dir(path: Path) -> None:
    """Delete every immediate entry of a directory, keeping the directory."""
    for item in path.iterdir():
        remove_path(item)


def list_subdirs(path: Path) -> list[Path]:
    """List immediate subdirectories of ``path`` sorted by name.

    Staging directories left behind by an interrupted copy are skipped.
    Returns an empty list if ``path`` is missing or unreadable.
    """
    try:
        return sorted(
            (p for p in path.iterdir() if p.is_dir() and not is_staging_name(p.name)),
            key=lambda p: p.name,
        )
    except OSError:
        return []
