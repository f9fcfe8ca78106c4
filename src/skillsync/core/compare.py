"""Content-hash comparison of directory trees.

Used to decide whether an incoming skill is identical to the copy already
in the mirror. Comparison is whole-file: every non-ignored file is hashed
and the two trees must contain the same relative paths with the same
hashes.
"""

import hashlib
import os
from pathlib import Path

from skillsync.utils.fs import is_within

# Entries skipped at every nesting level
IGNORE_PATTERNS = frozenset(
    {
        ".DS_Store",
        ".git",
        "node_modules",
        "Thumbs.db",
        ".gitignore",
    }
)

# Hash recorded for files that cannot be read
UNREADABLE_HASH = ""

_CHUNK_SIZE = 1024 * 1024


def hash_file(file_path: Path) -> str:
    """Calculate the MD5 hex digest of a file's content.

    Args:
        file_path: File to hash (symlinks are followed)

    Returns:
        Hex digest, or UNREADABLE_HASH if the file cannot be read
    """
    digest = hashlib.md5()
    try:
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError:
        return UNREADABLE_HASH
    return digest.hexdigest()


def hash_tree(root: Path) -> dict[str, str]:
    """Hash every non-ignored file below ``root``.

    Args:
        root: Directory to walk

    Returns:
        Mapping of POSIX-style path relative to ``root`` -> content hash.
        Unreadable directories contribute no entries. Directory symlinks
        that lead outside ``root`` are not descended into; they are
        recorded like an unreadable file.
    """
    root = Path(root)
    files: dict[str, str] = {}
    _collect(root, root, os.path.realpath(root), files, frozenset())
    return files


def _collect(
    directory: Path,
    root: Path,
    root_real: str,
    files: dict[str, str],
    ancestors: frozenset[str],
) -> None:
    real = os.path.realpath(directory)
    if real in ancestors:
        # directory symlink cycle
        return
    ancestors = ancestors | {real}

    try:
        entries = list(os.scandir(directory))
    except OSError:
        return

    for entry in entries:
        if entry.name in IGNORE_PATTERNS:
            continue

        path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
            if is_dir and entry.is_symlink():
                is_dir = is_within(os.path.realpath(path), root_real)
        except OSError:
            is_dir = False

        if is_dir:
            _collect(path, root, root_real, files, ancestors)
        else:
            files[path.relative_to(root).as_posix()] = hash_file(path)


def directories_equal(path_a: Path, path_b: Path) -> bool:
    """Compare two directories by content.

    Never raises: if either path is missing or not a directory the result
    is False. Two unreadable files at the same relative path compare equal.

    Args:
        path_a: First directory
        path_b: Second directory

    Returns:
        True if both trees hold the same files with identical content
    """
    try:
        if not Path(path_a).is_dir() or not Path(path_b).is_dir():
            return False
    except OSError:
        return False

    files_a = hash_tree(Path(path_a))
    files_b = hash_tree(Path(path_b))

    if len(files_a) != len(files_b):
        return False

    for rel_path, digest in files_a.items():
        if files_b.get(rel_path) != digest:
            return False

    return True
