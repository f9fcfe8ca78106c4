"""Abstract interface for cloning remote sources."""

from pathlib import Path
from typing import Protocol


class Cloner(Protocol):
    """Clones a repository into a local directory."""

    def __call__(self, url: str, dest: Path) -> None:
        """Clone ``url`` into ``dest``.

        Args:
            url: Repository URL
            dest: Directory to create with the checkout

        Raises:
            CloneError: If the clone fails
        """
        ...
