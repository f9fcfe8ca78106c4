"""Path utilities and store locations."""

import os
from pathlib import Path

CONFIG_DIR_NAME = ".skillsync"
CONFIG_FILENAME = "config.json"
LOCAL_STORE_NAME = "local"


def expand_path(path: str) -> Path:
    """Expand and normalize a path, resolving ~ and relative paths.

    Args:
        path: Path string that may contain ~ or be relative

    Returns:
        Absolute Path object
    """
    return Path(path).expanduser().resolve()


def expand_user(path: str) -> str:
    """Expand a leading ``~/`` to the home directory, leaving other paths alone."""
    if path == "~" or path.startswith("~/"):
        return str(Path.home()) + path[1:]
    return path


def collapse_path(path: str | Path) -> str:
    """Replace the home directory prefix with ``~`` for display."""
    text = str(path)
    home = str(Path.home())
    if text == home or text.startswith(home + os.sep):
        return "~" + text[len(home):]
    return text


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path that was ensured
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Get the skillsync config directory.

    Uses SKILLSYNC_HOME if set, otherwise ``.skillsync`` in the current
    directory. The same directory holds the fetched skill mirror.
    """
    env_dir = os.environ.get("SKILLSYNC_HOME")
    if env_dir:
        return expand_path(env_dir)
    return Path.cwd() / CONFIG_DIR_NAME


def get_local_store_dir(store_dir: Path) -> Path:
    """Get the flat mirror directory shared by all local sources."""
    return store_dir / LOCAL_STORE_NAME
