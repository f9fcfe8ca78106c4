"""CLI application entry point."""

import json
import os
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table
from typer.core import TyperGroup

from skillsync import __version__
from skillsync.config.defaults import known_targets
from skillsync.config.store import ConfigStore
from skillsync.core.distributor import sync_targets
from skillsync.core.reconcile import StickyDecision
from skillsync.core.resolver import detect_source_type, get_local_source_name, parse_git_url
from skillsync.core.skill import discover_skills
from skillsync.core.status import build_status
from skillsync.errors import ConfigError, SkillSyncError
from skillsync.fetch.runner import FetchOutcome, run_fetch
from skillsync.utils.output import (
    console,
    print_dim,
    print_error,
    print_info,
    print_success,
    status_line,
)
from skillsync.utils.paths import collapse_path, get_config_dir


class SkillSyncGroup(TyperGroup):
    """Command group that exits with status 1 on an unknown command."""

    def resolve_command(self, ctx, args: list[str]):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            # usage errors carry exit code 2, whichever click raised them
            if getattr(e, "exit_code", None) == 2:
                e.exit_code = 1
            raise


app = typer.Typer(
    name="skillsync",
    help="Sync agent skills to Cursor, Claude, Codex and more",
    cls=SkillSyncGroup,
    add_completion=False,
)

# Source subcommand group
source_app = typer.Typer(
    name="source",
    help="Manage skill sources",
    cls=SkillSyncGroup,
)
app.add_typer(source_app, name="source")

# Target subcommand group
target_app = typer.Typer(
    name="target",
    help="Manage sync targets",
    cls=SkillSyncGroup,
)
app.add_typer(target_app, name="target")


FETCH_SYMBOLS = {
    "fetched": "✓",
    "synced": "✓",
    "empty": "⚠",
    "skipped": "○",
    "disabled": "○",
    "error": "✗",
}

SYNC_SYMBOLS = {
    "synced": "✓",
    "partial": "⚠",
    "disabled": "○",
    "error": "✗",
}


def get_store() -> ConfigStore:
    """Config store for the current config directory."""
    return ConfigStore(get_config_dir())


def _print_help(ctx: typer.Context) -> None:
    # rich help formatting prints directly and returns an empty string
    help_text = ctx.get_help()
    if help_text:
        typer.echo(help_text)


def _version_callback(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Sync agent skills to Cursor, Claude, Codex and more."""
    if ctx.invoked_subcommand is None:
        _print_help(ctx)


@app.command("help")
def help_command(ctx: typer.Context):
    """Show this help."""
    _print_help(ctx.parent)


@app.command("version")
def version_command():
    """Show the version."""
    console.print(__version__)


@app.command()
def init():
    """Initialize config (.skillsync/).

    Creates the config file with the default sources if it does not exist.
    """
    store = get_store()
    try:
        if store.exists():
            print_dim(f"Config already exists: {store.config_path}")
            return

        config = store.read()

        console.print()
        print_success("Initialized skillsync")
        print_dim(f"Config: {store.config_path}")
        print_dim(f"Store:  {store.store_dir}")
        console.print()

        console.print("Default sources:")
        for name in config.sources:
            print_dim(f"  • {name}")
        console.print()

        console.print("[bold]Next steps:[/bold]")
        print_dim("  skillsync target add claude   # Add a target")
        print_dim("  skillsync fetch               # Download skills")
        print_dim("  skillsync sync                # Copy skills to targets")
        print_dim("  skillsync status              # Check status")
        console.print()

    except Exception as e:
        print_error(f"Failed to initialize: {e}")
        raise typer.Exit(1)


def _print_fetch_outcome(outcome: FetchOutcome) -> None:
    status_line(FETCH_SYMBOLS[outcome.status], outcome.name, outcome.message)


@app.command()
def fetch(
    source: Optional[str] = typer.Argument(
        None,
        help="Only fetch this source",
    ),
    overwrite_all: bool = typer.Option(
        False,
        "--overwrite-all",
        help="Overwrite every conflicting local skill without asking",
    ),
    skip_all: bool = typer.Option(
        False,
        "--skip-all",
        help="Keep every conflicting local skill without asking",
    ),
):
    """Fetch skills from Git and local sources.

    Remote sources are cloned fresh. Skills from local sources are copied
    into the shared local store; when a skill already exists with different
    content you are asked whether to overwrite it.
    """
    if overwrite_all and skip_all:
        print_error("--overwrite-all and --skip-all cannot be used together")
        raise typer.Exit(1)

    sticky = StickyDecision.UNSET
    if overwrite_all:
        sticky = StickyDecision.YES_ALL
    elif skip_all:
        sticky = StickyDecision.NO_ALL

    store = get_store()
    try:
        config = store.read()
        if source is not None and source not in config.sources:
            raise ConfigError(f'Source "{source}" not found')

        console.print()
        console.print("[bold]Fetching skills...[/bold]")
        console.print()

        run_fetch(
            config,
            store.store_dir,
            source_name=source,
            sticky=sticky,
            on_outcome=_print_fetch_outcome,
        )

        console.print()
        print_dim(f"Stored at: {store.store_dir}")
        console.print()

    except SkillSyncError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(1)


@app.command()
def sync():
    """Sync fetched skills to all enabled targets.

    Every enabled target directory is emptied and receives a fresh copy of
    all fetched skills.
    """
    store = get_store()
    try:
        config = store.read()

        console.print()
        console.print("[bold]Syncing skills to targets...[/bold]")
        console.print()

        report = sync_targets(config, store.store_dir)

        if report.no_skills:
            print_dim("  No skills found. Run 'skillsync fetch' first.")
            console.print()
            return

        print_dim(f"  Source: {report.skill_count} skills from {report.source_count} sources")
        console.print()

        if not report.targets:
            print_dim("  No targets configured. Add one: skillsync target add claude")

        for outcome in report.targets:
            status_line(SYNC_SYMBOLS[outcome.status], outcome.name, outcome.message, width=15)
            for skill_name, message in outcome.failures:
                print_dim(f"      {skill_name}: {message}")

        console.print()
        console.print("[bold]Done.[/bold]")
        console.print()

    except Exception as e:
        print_error(f"Failed to sync skills: {e}")
        raise typer.Exit(1)


@app.command()
def status():
    """View sync status of sources and targets."""
    store = get_store()
    try:
        config = store.read()
        report = build_status(config, store.store_dir)

        table = Table(title="Sources", show_header=True, header_style="bold cyan")
        table.add_column("Name", style="green")
        table.add_column("Type")
        table.add_column("Enabled")
        table.add_column("Fetched")
        table.add_column("Skills", justify="right")

        for src in report.sources:
            table.add_row(
                escape(src.name),
                src.kind,
                "yes" if src.enabled else "[dim]no[/dim]",
                "[green]✓[/green]" if src.fetched else "[red]✗[/red]",
                str(src.skill_count),
            )
        console.print(table)
        console.print()

        if not report.targets:
            print_info("No targets configured")
            print_dim("Add one: skillsync target add claude")
            return

        table = Table(title="Targets", show_header=True, header_style="bold cyan")
        table.add_column("Name", style="green")
        table.add_column("Path")
        table.add_column("Enabled")
        table.add_column("Skills", justify="right")
        table.add_column("In sync")

        for tgt in report.targets:
            if not tgt.exists:
                in_sync = "[dim]not created[/dim]"
            elif tgt.in_sync:
                in_sync = "[green]✓[/green]"
            else:
                in_sync = "[yellow]out of date[/yellow]"
            table.add_row(
                escape(tgt.name),
                escape(collapse_path(tgt.path)),
                "yes" if tgt.enabled else "[dim]no[/dim]",
                str(tgt.skill_count),
                in_sync,
            )
        console.print(table)
        console.print()
        print_dim(f"{report.skill_count} skill(s) in store: {store.store_dir}")

    except Exception as e:
        print_error(f"Failed to read status: {e}")
        raise typer.Exit(1)


@app.command("list")
def list_skills():
    """List all fetched skills."""
    store = get_store()
    try:
        config = store.read()
        skills = discover_skills(config, store.store_dir)

        if not skills:
            print_info("No skills found")
            print_dim("Run 'skillsync fetch' first")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Name", style="green")
        table.add_column("Source")
        table.add_column("Description")

        for skill in skills:
            table.add_row(
                escape(skill.name),
                escape(skill.source),
                escape(skill.description or ""),
            )

        console.print(table)
        print_dim(f"{len(skills)} skill(s)")

    except Exception as e:
        print_error(f"Failed to list skills: {e}")
        raise typer.Exit(1)


app.command("ls", hidden=True, help="List all fetched skills.")(list_skills)


@app.command("config")
def show_config():
    """Show configuration."""
    store = get_store()
    try:
        config = store.read()
        console.print(f"[bold]Config:[/bold] {escape(str(store.config_path))}")
        console.print(f"[bold]Store:[/bold]  {escape(str(store.store_dir))}")
        console.print()
        console.print_json(json.dumps(config.to_json_dict()))

    except Exception as e:
        print_error(f"Failed to read config: {e}")
        raise typer.Exit(1)


# Source commands


@source_app.callback(invoke_without_command=True)
def source_main(ctx: typer.Context):
    """Manage skill sources."""
    if ctx.invoked_subcommand is None:
        source_list()


@source_app.command("add")
def source_add(
    value: Optional[str] = typer.Argument(
        None,
        metavar="SOURCE",
        help="GitHub URL, owner/repo, or local directory",
    ),
    subdir: Optional[str] = typer.Option(
        None,
        "--subdir",
        help="Subdirectory within the repository",
    ),
):
    """Add a source (e.g., owner/repo or ~/path)."""
    if not value:
        print_error("Source required")
        console.print()
        print_dim("Usage:")
        print_dim("  skillsync source add <url>           # GitHub URL")
        print_dim("  skillsync source add owner/repo      # GitHub shorthand")
        print_dim("  skillsync source add ~/path          # Local path")
        console.print()
        print_dim("Options:")
        print_dim("  --subdir <path>   Subdirectory within repository")
        raise typer.Exit(1)

    store = get_store()
    try:
        if detect_source_type(value) == "remote":
            parsed = parse_git_url(value)
            subdir = subdir or parsed.subdir

            config = store.read()
            if parsed.name in config.sources:
                store.set_source_enabled(parsed.name, True)
                print_success(f"Enabled existing source: {parsed.name}")
                return

            store.add_source(parsed.name, url=parsed.url, subdir=subdir)
            print_success(f"Added source: {parsed.name}")
            print_dim(f"  URL: {parsed.url}")
            if subdir:
                print_dim(f"  Subdir: {subdir}")
            print_dim("Run 'skillsync fetch' to download skills.")
        else:
            full_path = get_local_source_name(value)
            if not os.path.exists(full_path):
                raise ConfigError(f"Path does not exist: {full_path}")
            if not os.path.isdir(full_path):
                raise ConfigError(f"Path is not a directory: {full_path}")

            config = store.read()
            if full_path in config.sources:
                store.set_source_enabled(full_path, True)
                print_success(f"Enabled existing source: {full_path}")
                return

            store.add_source(full_path, local_path=full_path)
            print_success(f"Added local source: {full_path}")
            print_dim("Run 'skillsync fetch' to sync skills.")

    except (SkillSyncError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


def _require_name(name: Optional[str], kind: str) -> str:
    if not name:
        print_error(f"{kind} name required")
        raise typer.Exit(1)
    return name


@source_app.command("remove")
def source_remove(name: Optional[str] = typer.Argument(None, help="Source name")):
    """Remove a source."""
    name = _require_name(name, "Source")
    try:
        get_store().remove_source(name)
        print_success(f"Removed source: {name}")
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)


source_app.command("rm", hidden=True, help="Remove a source.")(source_remove)


def _set_source_enabled(name: Optional[str], enabled: bool) -> None:
    name = _require_name(name, "Source")
    try:
        get_store().set_source_enabled(name, enabled)
        print_success(f"Source {name} {'enabled' if enabled else 'disabled'}")
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)


@source_app.command("on")
def source_on(name: Optional[str] = typer.Argument(None, help="Source name")):
    """Enable a source."""
    _set_source_enabled(name, True)


@source_app.command("off")
def source_off(name: Optional[str] = typer.Argument(None, help="Source name")):
    """Disable a source."""
    _set_source_enabled(name, False)


@source_app.command("list")
def source_list():
    """List sources."""
    config = get_store().read()

    console.print()
    console.print("[bold]Sources[/bold]")
    console.print()

    if not config.sources:
        print_dim("  No sources configured.")
        print_dim("  Add a source: skillsync source add anthropics/skills")
        console.print()
        return

    for name, source in config.sources.items():
        symbol = "[green]✓[/green]" if source.enabled else "[dim]○[/dim]"
        suffix = "" if source.enabled else " [dim](disabled)[/dim]"
        console.print(f"  {symbol} [bold]{escape(name)}[/bold]{suffix}", soft_wrap=True)
        if source.url:
            print_dim(f"    {source.url}")
        if source.subdir:
            print_dim(f"    Subdir: {source.subdir}")
        if source.local_path:
            print_dim(f"    Local: {source.local_path}")

    console.print()


source_app.command("ls", hidden=True, help="List sources.")(source_list)


# Target commands


@target_app.callback(invoke_without_command=True)
def target_main(ctx: typer.Context):
    """Manage sync targets."""
    if ctx.invoked_subcommand is None:
        target_list()


@target_app.command("add")
def target_add(
    name: Optional[str] = typer.Argument(None, help="Target name (e.g., cursor, claude)"),
    path: Optional[str] = typer.Argument(None, help="Directory for a custom target"),
):
    """Add a target (e.g., cursor, claude)."""
    if not name:
        print_error("Target name required")
        console.print()
        print_dim("Known targets:")
        for known, known_path in known_targets().items():
            print_dim(f"  {known.ljust(15)} {collapse_path(known_path)}")
        console.print()
        print_dim("Usage:")
        print_dim("  skillsync target add cursor           # Add known target")
        print_dim("  skillsync target add myapp ~/path     # Add custom target")
        raise typer.Exit(1)

    store = get_store()
    try:
        config = store.read()
        if name in config.targets:
            store.set_target_enabled(name, True)
            print_success(f"Enabled existing target: {name}")
            return

        target = store.add_target(name, path)
        print_success(f"Added target: {name}")
        print_dim(f"  Path: {collapse_path(target.path)}")

    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)


@target_app.command("remove")
def target_remove(name: Optional[str] = typer.Argument(None, help="Target name")):
    """Remove a target."""
    name = _require_name(name, "Target")
    try:
        get_store().remove_target(name)
        print_success(f"Removed target: {name}")
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)


target_app.command("rm", hidden=True, help="Remove a target.")(target_remove)


def _set_target_enabled(name: Optional[str], enabled: bool) -> None:
    name = _require_name(name, "Target")
    try:
        get_store().set_target_enabled(name, enabled)
        print_success(f"Target {name} {'enabled' if enabled else 'disabled'}")
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)


@target_app.command("on")
def target_on(name: Optional[str] = typer.Argument(None, help="Target name")):
    """Enable a target."""
    _set_target_enabled(name, True)


@target_app.command("off")
def target_off(name: Optional[str] = typer.Argument(None, help="Target name")):
    """Disable a target."""
    _set_target_enabled(name, False)


@target_app.command("list")
def target_list():
    """List targets."""
    config = get_store().read()
    known = known_targets()

    console.print()
    console.print("[bold]Targets[/bold]")
    console.print()

    if config.targets:
        console.print("[bold]Configured:[/bold]")
        for name, target in config.targets.items():
            symbol = "[green]✓[/green]" if target.enabled else "[dim]○[/dim]"
            suffix = "" if target.enabled else " [dim](disabled)[/dim]"
            console.print(
                f"  {symbol} {escape(name.ljust(15))} "
                f"[dim]{escape(collapse_path(target.path))}[/dim]{suffix}",
                soft_wrap=True,
            )
        console.print()

    available = [k for k in known if k not in config.targets]
    if available:
        console.print("[bold]Available (not configured):[/bold]")
        print_dim(f"  {', '.join(available)}")
        console.print()

    print_dim(f"Known targets: {', '.join(known)}")
    console.print()


target_app.command("ls", hidden=True, help="List targets.")(target_list)


if __name__ == "__main__":
    app()
