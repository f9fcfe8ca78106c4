"""Shared pytest fixtures for skillsync tests."""

from pathlib import Path

import pytest

from skillsync.config.store import ConfigStore


def write_skill(root: Path, name: str, files: dict[str, str] | None = None) -> Path:
    """Create a skill directory under ``root`` with the given files."""
    skill_dir = root / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    if files is None:
        files = {"SKILL.md": f"---\nname: {name}\ndescription: The {name} skill\n---\n\n# {name}\n"}
    for rel_path, content in files.items():
        path = skill_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return skill_dir


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run with a private HOME and working directory."""
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    home_dir = tmp_path / "home"
    home_dir.mkdir()

    monkeypatch.chdir(work_dir)
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("SKILLSYNC_HOME", raising=False)

    return {"work_dir": work_dir, "home_dir": home_dir}


@pytest.fixture
def config_dir(tmp_path):
    """Provide a config/store directory."""
    return tmp_path / ".skillsync"


@pytest.fixture
def store(config_dir):
    """Provide a ConfigStore on a temporary directory."""
    return ConfigStore(config_dir)


@pytest.fixture
def source_dir(tmp_path):
    """Provide an empty local source directory."""
    path = tmp_path / "my-skills"
    path.mkdir()
    return path


@pytest.fixture
def mirror_dir(tmp_path):
    """Provide the (not yet created) local mirror directory."""
    return tmp_path / ".skillsync" / "local"


@pytest.fixture
def sample_skill_dir(tmp_path):
    """Create a sample skill directory with SKILL.md and nested files."""
    skill_dir = write_skill(
        tmp_path,
        "sample-skill",
        {
            "SKILL.md": """---
name: sample-skill
description: A sample skill for testing
version: 1.0.0
---

# Sample Skill

This is a sample skill for testing purposes.
""",
            "config.json": '{"setting": "value"}',
            "scripts/run.py": "print('Hello from sample skill')",
        },
    )
    return skill_dir


class FakeCloner:
    """Clone stand-in that writes a fixed tree instead of running git."""

    def __init__(self, files: dict[str, str] | None = None, error: Exception | None = None):
        self.files = files if files is not None else {
            "skill-a/SKILL.md": "---\nname: skill-a\n---\n",
            "skill-b/SKILL.md": "---\nname: skill-b\n---\n",
            "README.md": "# repo",
            ".git/HEAD": "ref: refs/heads/main",
        }
        self.error = error
        self.calls: list[tuple[str, Path]] = []

    def __call__(self, url: str, dest: Path) -> None:
        self.calls.append((url, dest))
        if self.error is not None:
            raise self.error
        for rel_path, content in self.files.items():
            path = dest / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)


@pytest.fixture
def fake_cloner():
    """Provide a FakeCloner with a two-skill repository."""
    return FakeCloner()


@pytest.fixture
def make_skill():
    """Provide the write_skill helper."""
    return write_skill


@pytest.fixture
def cloner_factory():
    """Provide the FakeCloner class for tests needing a custom repository."""
    return FakeCloner
