"""Built-in default configuration and known target locations."""

from pathlib import Path

# Default configuration written on first use
DEFAULT_CONFIG = {
    "sources": {
        "anthropics/skills": {
            "url": "https://github.com/anthropics/skills",
            "enabled": True,
        },
        "vercel-labs/agent-skills": {
            "url": "https://github.com/vercel-labs/agent-skills",
            "subdir": "skills",
            "enabled": True,
        },
    },
    "targets": {},
}

# Known target name -> path relative to the home directory
KNOWN_TARGET_DIRS = {
    "cursor": (".cursor", "skills"),
    "claude": (".claude", "skills"),
    "codex": (".codex", "skills"),
    "antigravity": (".gemini", "antigravity", "skills"),
    "gemini": (".gemini", "skills"),
    "copilot": (".copilot", "skills"),
    "windsurf": (".windsurf", "skills"),
    "openclaw": (".openclaw",),
}


def known_targets() -> dict[str, str]:
    """Resolve the known target table against the current home directory."""
    home = Path.home()
    return {name: str(home.joinpath(*parts)) for name, parts in KNOWN_TARGET_DIRS.items()}
