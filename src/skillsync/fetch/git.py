"""Shallow git clones of remote sources."""

import subprocess
from pathlib import Path

from skillsync.errors import CloneError
from skillsync.utils.logging import get_logger

logger = get_logger("git")

GIT_EXECUTABLE = "git"


def clone_repo(url: str, dest: Path) -> None:
    """Run ``git clone --depth 1`` into ``dest``.

    Args:
        url: Repository URL
        dest: Checkout directory (must not exist yet)

    Raises:
        CloneError: If git is missing or the clone fails; the message is
            git's error output
    """
    cmd = [GIT_EXECUTABLE, "clone", "--depth", "1", url, str(dest)]
    logger.debug("Running %s", " ".join(cmd))

    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise CloneError(f"{GIT_EXECUTABLE} executable not found") from e
    except subprocess.CalledProcessError as e:
        message = (e.stderr or e.stdout or "").strip()
        raise CloneError(message or f"git clone exited with status {e.returncode}") from e
