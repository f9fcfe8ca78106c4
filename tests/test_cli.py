"""Integration tests for CLI commands."""

import json
import subprocess
from pathlib import Path

import pytest
from typer.testing import CliRunner

from skillsync import __version__
from skillsync.cli import app
from skillsync.fetch import git as git_module

runner = CliRunner()


@pytest.fixture
def cli_test_env(isolated_env):
    """Isolated CLI environment with the config paths filled in."""
    config_dir = isolated_env["work_dir"] / ".skillsync"
    return {
        **isolated_env,
        "config_dir": config_dir,
        "config_path": config_dir / "config.json",
    }


def read_config(env):
    return json.loads(env["config_path"].read_text())


def write_config(env, data):
    env["config_dir"].mkdir(parents=True, exist_ok=True)
    env["config_path"].write_text(json.dumps(data))


@pytest.fixture
def fake_git(monkeypatch):
    """Replace git with a clone that writes a two-skill repository."""
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        dest = Path(cmd[-1])
        for name in ("skill-a", "skill-b"):
            (dest / name).mkdir(parents=True)
            (dest / name / "SKILL.md").write_text(
                f"---\nname: {name}\ndescription: Remote {name}\n---\n"
            )
        (dest / ".git").mkdir()
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(git_module.subprocess, "run", fake_run)
    return calls


class TestBasics:
    """Test help, version and unknown commands."""

    def test_no_args_shows_help(self, cli_test_env):
        """Test running without a command prints usage."""
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "fetch" in result.output

    def test_version(self, cli_test_env):
        """Test the version command and flag."""
        assert runner.invoke(app, ["version"]).output.strip() == __version__
        assert runner.invoke(app, ["--version"]).output.strip() == __version__

    def test_unknown_command_exits_1(self, cli_test_env):
        """Test an unknown command is a usage error with status 1."""
        result = runner.invoke(app, ["frobnicate"])
        assert result.exit_code == 1
        assert "No such command" in result.output

    @pytest.mark.parametrize("group", ["source", "target"])
    def test_unknown_subcommand_exits_1(self, cli_test_env, group):
        """Test unknown commands inside the source and target groups."""
        result = runner.invoke(app, [group, "bogus"])
        assert result.exit_code == 1

    def test_usage_errors_exit_1_for_any_exception_class(self, monkeypatch):
        """Test the exit code is rewritten from the attribute, not the class."""
        from typer.core import TyperGroup

        from skillsync.cli import SkillSyncGroup

        class ForeignUsageError(Exception):
            exit_code = 2

        def failing_resolve(self, ctx, args):
            raise ForeignUsageError()

        monkeypatch.setattr(TyperGroup, "resolve_command", failing_resolve)
        group = object.__new__(SkillSyncGroup)

        with pytest.raises(ForeignUsageError) as exc_info:
            group.resolve_command(None, ["x"])

        assert exc_info.value.exit_code == 1


class TestInitCommand:
    """Test init command."""

    def test_init_creates_config_file(self, cli_test_env):
        """Test init writes the default configuration."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Initialized skillsync" in result.output
        assert "anthropics/skills" in result.output
        assert list(read_config(cli_test_env)["sources"]) == [
            "anthropics/skills",
            "vercel-labs/agent-skills",
        ]

    def test_init_does_not_overwrite_existing(self, cli_test_env):
        """Test init leaves an existing config alone."""
        write_config(cli_test_env, {"sources": {}, "targets": {}})

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Config already exists" in result.output
        assert read_config(cli_test_env) == {"sources": {}, "targets": {}}

    def test_skillsync_home_override(self, cli_test_env, monkeypatch, tmp_path):
        """Test SKILLSYNC_HOME moves the config directory."""
        monkeypatch.setenv("SKILLSYNC_HOME", str(tmp_path / "custom"))

        runner.invoke(app, ["init"])

        assert (tmp_path / "custom" / "config.json").exists()
        assert not cli_test_env["config_path"].exists()


class TestSourceCommands:
    """Test source subcommands."""

    def test_add_shorthand(self, cli_test_env):
        """Test owner/repo is stored with a GitHub URL."""
        result = runner.invoke(app, ["source", "add", "acme/skills"])

        assert result.exit_code == 0
        assert "Added source: acme/skills" in result.output
        source = read_config(cli_test_env)["sources"]["acme/skills"]
        assert source == {"url": "https://github.com/acme/skills", "enabled": True}

    def test_add_url_with_tree_subdir(self, cli_test_env):
        """Test a /tree/<branch>/<path> URL sets the subdir."""
        runner.invoke(app, ["source", "add", "https://github.com/acme/skills/tree/main/pack"])
        assert read_config(cli_test_env)["sources"]["acme/skills"]["subdir"] == "pack"

    def test_add_subdir_option(self, cli_test_env):
        """Test --subdir is stored."""
        runner.invoke(app, ["source", "add", "acme/skills", "--subdir", "skills"])
        assert read_config(cli_test_env)["sources"]["acme/skills"]["subdir"] == "skills"

    def test_add_local(self, cli_test_env):
        """Test a relative local directory is stored by absolute path."""
        local = cli_test_env["work_dir"] / "mine"
        local.mkdir()

        result = runner.invoke(app, ["source", "add", "./mine"])

        assert result.exit_code == 0
        assert read_config(cli_test_env)["sources"][str(local)] == {
            "enabled": True,
            "localPath": str(local),
        }

    def test_add_local_missing(self, cli_test_env):
        """Test a missing local directory is rejected."""
        result = runner.invoke(app, ["source", "add", "./missing"])

        assert result.exit_code == 1
        assert "Path does not exist" in result.output

    def test_add_existing_reenables(self, cli_test_env):
        """Test adding a disabled source enables it again."""
        runner.invoke(app, ["source", "off", "anthropics/skills"])

        result = runner.invoke(app, ["source", "add", "anthropics/skills"])

        assert result.exit_code == 0
        assert "Enabled existing source" in result.output
        assert read_config(cli_test_env)["sources"]["anthropics/skills"]["enabled"] is True

    def test_add_without_argument(self, cli_test_env):
        """Test a missing source prints usage and exits 1."""
        result = runner.invoke(app, ["source", "add"])
        assert result.exit_code == 1
        assert "Source required" in result.output

    def test_remove(self, cli_test_env):
        """Test removing and the rm alias."""
        assert runner.invoke(app, ["source", "remove", "anthropics/skills"]).exit_code == 0
        assert runner.invoke(app, ["source", "rm", "vercel-labs/agent-skills"]).exit_code == 0
        assert read_config(cli_test_env)["sources"] == {}

    def test_remove_missing(self, cli_test_env):
        """Test removing an unknown source exits 1."""
        result = runner.invoke(app, ["source", "remove", "nope/nope"])
        assert result.exit_code == 1
        assert 'Source "nope/nope" not found' in result.output

    def test_list(self, cli_test_env):
        """Test the source list and its default invocation."""
        runner.invoke(app, ["source", "off", "anthropics/skills"])

        for args in (["source", "list"], ["source", "ls"], ["source"]):
            result = runner.invoke(app, args)
            assert result.exit_code == 0
            assert "anthropics/skills" in result.output
            assert "(disabled)" in result.output


class TestTargetCommands:
    """Test target subcommands."""

    def test_add_known(self, cli_test_env):
        """Test a known target resolves under HOME."""
        result = runner.invoke(app, ["target", "add", "claude"])

        assert result.exit_code == 0
        home = cli_test_env["home_dir"]
        assert read_config(cli_test_env)["targets"]["claude"] == {
            "path": str(home / ".claude" / "skills"),
            "enabled": True,
        }

    def test_add_custom(self, cli_test_env, tmp_path):
        """Test a custom target with an explicit path."""
        result = runner.invoke(app, ["target", "add", "myapp", str(tmp_path / "app")])

        assert result.exit_code == 0
        assert read_config(cli_test_env)["targets"]["myapp"]["path"] == str(tmp_path / "app")

    def test_add_unknown_without_path(self, cli_test_env):
        """Test an unknown target without path exits 1."""
        result = runner.invoke(app, ["target", "add", "vim"])
        assert result.exit_code == 1
        assert "Please provide a path" in result.output

    def test_add_without_name_lists_known(self, cli_test_env):
        """Test a missing name shows known targets and exits 1."""
        result = runner.invoke(app, ["target", "add"])
        assert result.exit_code == 1
        assert "cursor" in result.output
        assert "windsurf" in result.output

    def test_toggle_and_remove(self, cli_test_env):
        """Test off, on and remove."""
        runner.invoke(app, ["target", "add", "cursor"])

        assert runner.invoke(app, ["target", "off", "cursor"]).exit_code == 0
        assert read_config(cli_test_env)["targets"]["cursor"]["enabled"] is False
        assert runner.invoke(app, ["target", "on", "cursor"]).exit_code == 0
        assert read_config(cli_test_env)["targets"]["cursor"]["enabled"] is True
        assert runner.invoke(app, ["target", "rm", "cursor"]).exit_code == 0
        assert read_config(cli_test_env)["targets"] == {}

    def test_toggle_missing(self, cli_test_env):
        """Test toggling an unknown target exits 1."""
        assert runner.invoke(app, ["target", "on", "nope"]).exit_code == 1

    def test_list(self, cli_test_env):
        """Test configured and available targets are listed."""
        runner.invoke(app, ["target", "add", "codex"])

        result = runner.invoke(app, ["target", "list"])

        assert result.exit_code == 0
        assert "Configured" in result.output
        assert "codex" in result.output
        assert "Available" in result.output


class TestFetchCommand:
    """Test fetch command."""

    def test_fetch_remote(self, cli_test_env, fake_git):
        """Test remote sources are cloned into the store."""
        write_config(cli_test_env, {
            "sources": {"acme/skills": {"url": "https://github.com/acme/skills", "enabled": True}},
            "targets": {},
        })

        result = runner.invoke(app, ["fetch"])

        assert result.exit_code == 0
        assert "acme/skills" in result.output
        entry = cli_test_env["config_dir"] / "acme" / "skills"
        assert (entry / "skill-a" / "SKILL.md").exists()
        assert not (entry / ".git").exists()
        assert fake_git[0][:4] == ["git", "clone", "--depth", "1"]

    def test_fetch_failure_continues(self, cli_test_env, monkeypatch):
        """Test a failing clone is reported and the command still succeeds."""

        def failing_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(128, cmd, stderr="fatal: repository not found\n")

        monkeypatch.setattr(git_module.subprocess, "run", failing_run)
        local = cli_test_env["work_dir"] / "mine"
        (local / "x").mkdir(parents=True)
        write_config(cli_test_env, {
            "sources": {
                "acme/gone": {"url": "https://github.com/acme/gone", "enabled": True},
                str(local): {"localPath": str(local), "enabled": True},
            },
            "targets": {},
        })

        result = runner.invoke(app, ["fetch"])

        assert result.exit_code == 0
        assert "fatal: repository not found" in result.output
        assert (cli_test_env["config_dir"] / "local" / "x").is_dir()

    def test_fetch_unknown_source(self, cli_test_env):
        """Test naming an unknown source exits 1."""
        result = runner.invoke(app, ["fetch", "nope/nope"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_conflicting_batch_flags(self, cli_test_env):
        """Test --overwrite-all and --skip-all are exclusive."""
        result = runner.invoke(app, ["fetch", "--overwrite-all", "--skip-all"])
        assert result.exit_code == 1

    def _local_conflict(self, env):
        local = env["work_dir"] / "mine"
        (local / "a").mkdir(parents=True)
        (local / "a" / "SKILL.md").write_text("new")
        (local / "b").mkdir()
        (local / "b" / "SKILL.md").write_text("new")
        mirror = env["config_dir"] / "local"
        for name in ("a", "b"):
            (mirror / name).mkdir(parents=True)
            (mirror / name / "SKILL.md").write_text("old")
        write_config(env, {
            "sources": {str(local): {"localPath": str(local), "enabled": True}},
            "targets": {},
        })
        return mirror

    def test_interactive_no_all(self, cli_test_env):
        """Test answering no-all keeps every conflicting skill after one prompt."""
        mirror = self._local_conflict(cli_test_env)

        result = runner.invoke(app, ["fetch"], input="no-all\n")

        assert result.exit_code == 0
        assert result.output.count("Overwrite?") == 1
        assert (mirror / "a" / "SKILL.md").read_text() == "old"
        assert (mirror / "b" / "SKILL.md").read_text() == "old"

    def test_interactive_invalid_answer(self, cli_test_env):
        """Test an invalid answer is treated as no with a warning."""
        mirror = self._local_conflict(cli_test_env)

        result = runner.invoke(app, ["fetch"], input="maybe\ny\n")

        assert result.exit_code == 0
        assert 'treating as "no"' in result.output
        assert (mirror / "a" / "SKILL.md").read_text() == "old"
        assert (mirror / "b" / "SKILL.md").read_text() == "new"

    def test_overwrite_all_never_prompts(self, cli_test_env):
        """Test --overwrite-all replaces conflicts without prompting."""
        mirror = self._local_conflict(cli_test_env)

        result = runner.invoke(app, ["fetch", "--overwrite-all"])

        assert result.exit_code == 0
        assert "Overwrite?" not in result.output
        assert (mirror / "a" / "SKILL.md").read_text() == "new"


class TestSyncCommand:
    """Test sync command."""

    def test_sync_without_skills(self, cli_test_env):
        """Test sync before fetch tells the user to fetch."""
        result = runner.invoke(app, ["sync"])
        assert result.exit_code == 0
        assert "No skills found" in result.output

    def test_fetch_then_sync(self, cli_test_env, fake_git, tmp_path):
        """Test the full fetch and sync flow."""
        target = tmp_path / "target"
        write_config(cli_test_env, {
            "sources": {"acme/skills": {"url": "https://github.com/acme/skills", "enabled": True}},
            "targets": {"mine": {"path": str(target), "enabled": True}},
        })

        runner.invoke(app, ["fetch"])
        result = runner.invoke(app, ["sync"])

        assert result.exit_code == 0
        assert "Source: 2 skills from 1 sources" in result.output
        assert "Done." in result.output
        assert sorted(p.name for p in target.iterdir()) == ["skill-a", "skill-b"]

    def test_sync_without_targets(self, cli_test_env):
        """Test sync with skills but no targets suggests adding one."""
        skill = cli_test_env["config_dir"] / "local" / "x"
        skill.mkdir(parents=True)
        write_config(cli_test_env, {"sources": {}, "targets": {}})

        result = runner.invoke(app, ["sync"])

        assert result.exit_code == 0
        assert "No targets configured" in result.output


class TestReportCommands:
    """Test status, list and config."""

    def test_list_and_status(self, cli_test_env, fake_git, tmp_path):
        """Test fetched skills appear in list and status."""
        write_config(cli_test_env, {
            "sources": {"acme/skills": {"url": "https://github.com/acme/skills", "enabled": True}},
            "targets": {"mine": {"path": str(tmp_path / "t"), "enabled": True}},
        })
        runner.invoke(app, ["fetch"])

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "skill-a" in result.output
        assert "Remote skill-a" in result.output
        assert runner.invoke(app, ["ls"]).exit_code == 0

        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "acme/skills" in result.output
        assert "Targets" in result.output

    def test_list_empty(self, cli_test_env):
        """Test list before fetch."""
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No skills found" in result.output

    def test_config_shows_json(self, cli_test_env):
        """Test config prints paths and the document."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "config.json" in result.output
        assert '"anthropics/skills"' in result.output
