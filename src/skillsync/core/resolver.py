"""Classification and parsing of source identifiers.

A source given on the command line is either:
- a remote repository: an http(s) URL or ``owner/repo`` shorthand
- a local directory: ``/abs``, ``~/x``, ``./x``, ``../x`` or ``C:\\x``
"""

import os
import re
from dataclasses import dataclass
from typing import Literal, Optional
from urllib.parse import urlparse

from skillsync.utils.paths import expand_user

SourceKind = Literal["remote", "local"]

_WINDOWS_ABSOLUTE = re.compile(r"^[A-Za-z]:[\\/]")


@dataclass
class ParsedGitUrl:
    """A remote source identifier split into its parts.

    Attributes:
        name: Source name in ``owner/repo`` form
        url: Clone URL
        subdir: Subdirectory restriction taken from a ``/tree/<branch>/...`` URL
    """

    name: str
    url: str
    subdir: Optional[str] = None


def is_local_path(value: str) -> bool:
    """Check whether a source identifier looks like a filesystem path."""
    if value.startswith(("/", "~/", "./", "../")):
        return True
    return bool(_WINDOWS_ABSOLUTE.match(value))


def detect_source_type(value: str) -> SourceKind:
    """Classify a source identifier as remote or local."""
    if value.startswith(("http://", "https://")):
        return "remote"
    if is_local_path(value):
        return "local"
    if "/" in value:
        return "remote"
    return "local"


def parse_git_url(value: str) -> ParsedGitUrl:
    """Parse a remote source identifier.

    Handles:
    - https://github.com/owner/repo
    - https://github.com/owner/repo/tree/main/path/to/skills (subdir = path/to/skills)
    - github.com/owner/repo (scheme optional for github.com)
    - owner/repo (GitHub shorthand)
    - https://host/owner/repo for other hosts

    Args:
        value: Identifier to parse

    Returns:
        ParsedGitUrl

    Raises:
        ValueError: If the identifier is not a recognized repository form
    """
    value = value.strip().rstrip("/")

    if value.startswith(("http://", "https://")) or value.startswith(
        ("github.com/", "www.github.com/")
    ):
        url = value if value.startswith("http") else f"https://{value}"
        parsed = urlparse(url)
        parts = [p for p in parsed.path.split("/") if p]
        if not parsed.netloc or len(parts) < 2:
            raise ValueError("Invalid Git URL format")

        owner = parts[0]
        repo = parts[1]
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        name = f"{owner}/{repo}"

        subdir = None
        # /tree/<branch>/<path...>
        if len(parts) >= 5 and parts[2] == "tree":
            subdir = "/".join(parts[4:])

        netloc = parsed.netloc
        if netloc == "www.github.com":
            netloc = "github.com"
        scheme = "https" if netloc == "github.com" else parsed.scheme
        return ParsedGitUrl(name=name, url=f"{scheme}://{netloc}/{name}", subdir=subdir)

    if "/" in value and not is_local_path(value):
        return ParsedGitUrl(name=value, url=f"https://github.com/{value}")

    raise ValueError("Invalid Git URL format")


def get_local_source_name(value: str) -> str:
    """Turn a local path identifier into the absolute path used as source name.

    Expands ``~`` and makes relative paths absolute against the current
    directory. Symlinks are not resolved.
    """
    expanded = expand_user(value)
    if os.path.isabs(expanded):
        return os.path.normpath(expanded)
    return os.path.normpath(os.path.join(os.getcwd(), expanded))
