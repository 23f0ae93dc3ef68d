#!/usr/bin/env python3
import os
from pathlib import Path
from typing import List, Optional, Tuple

import click
from git import Repo
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import DEFAULT_CONFIG_FILENAME, Config
from .errors import GuardError
from .git_helper import (
    get_current_branch,
    get_prefix_stats,
    get_staged_files,
    has_commit_prefix,
    is_special_commit,
    normalize_path,
    open_repo,
    read_commit_message,
)
from .glob import match_any
from .hooks import install_hooks, installed_hooks, uninstall_hooks
from .messages import get_messages
from .models import ValidationResult
from .observers import ConsoleLogObserver, FileLogObserver
from .presets import build_default_registry, default_registry
from .validator import CommitValidator

console = Console()

DEFAULT_STATS_COUNT = 20
MAX_STATS_COUNT = 1000


def depth_label(config: Config) -> str:
    label = str(config.depth)
    if config.depth == "auto":
        label = f"auto (max {config.max_depth})"
    if config.depth_overrides:
        label += " (with path-specific overrides)"
    return label


def print_verbose(config: Config, message: str) -> None:
    if config.verbose:
        console.print(f"[dim]{escape(message)}[/dim]")


def load_context(path: Path) -> Tuple[Repo, Path, Config]:
    """Open the repository and load its configuration."""
    repo = open_repo(path)
    repo_root = Path(repo.working_tree_dir)
    return repo, repo_root, Config.load(repo_root)


def make_observers(config: Config, repo_root: Path):
    messages = get_messages(config.language)
    console_observer = ConsoleLogObserver(console, messages, depth_label(config))
    file_observer = FileLogObserver(
        str(config.get_log_file(repo_root)), config.log_max_age_hours
    )
    return console_observer, file_observer


@click.group()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.version_option(__version__, prog_name="git-commit-guard")
@click.pass_context
def main(ctx: click.Context, path: Path):
    """
    Commit policy enforcer for git hooks.

    Rejects commits whose staged files span more than one folder (folder-based
    preset) or whose message breaks the configured format (folder-based
    [prefix] or conventional-commits).

    Configuration can be set in .gitcommitguard.toml in the repository root,
    or under [tool.gitcommitguard] in pyproject.toml.
    """
    ctx.ensure_object(dict)
    ctx.obj["path"] = path.absolute()


@main.command()
@click.option("--preset", help="Preset to enforce (overrides config setting)")
@click.option("--depth", help="Folder depth or 'auto' (overrides config setting)")
@click.option(
    "--files",
    "files_arg",
    help="Comma-separated files to validate instead of the staged ones (dry run, nothing is logged)",
)
@click.pass_context
def check(ctx: click.Context, preset: Optional[str], depth: Optional[str], files_arg: Optional[str]):
    """Validate staged files (pre-commit hook), or a given list with --files."""
    dry_run = files_arg is not None
    try:
        repo, repo_root, config = load_context(ctx.obj["path"])
        config = config.with_overrides(preset=preset, depth=depth)
        print_verbose(config, f"Config loaded: preset={config.preset}, depth={config.depth}, enabled={config.enabled}")

        if not config.enabled and not dry_run:
            print_verbose(config, "Hook disabled, exiting")
            return

        validator = CommitValidator(config)
        console_observer, file_observer = make_observers(config, repo_root)
        observers = [console_observer]

        if dry_run:
            files = [normalize_path(f.strip()) for f in files_arg.split(",") if f.strip()]
        else:
            file_observer.clear()
            print_verbose(config, "Previous log file cleared")
            observers.append(file_observer)
            files = get_staged_files(repo)
            print_verbose(config, f"Found {len(files)} staged files")

        if not files:
            console.print(f"[yellow]⚠️  {get_messages(config.language).no_files_staged}[/yellow]")
            return

        result = validator.validate(files)
        if dry_run:
            print_dry_run(validator, files, result)
        for observer in observers:
            observer.on_files_validated(files, result)
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    if not result.valid:
        ctx.exit(1)


def print_dry_run(validator: CommitValidator, files: List[str], result: ValidationResult) -> None:
    config = validator.config
    console.print("[bold]Validation Check (Dry Run)[/bold]")
    console.print(f"Test files:  {len(files)}")
    console.print(f"Depth:       {depth_label(config)}", markup=False)

    ignored = [f for f in files if match_any(f, config.ignore_paths)]
    if ignored:
        console.print(f"\n📝 Ignored files ({len(ignored)}):")
        for path in ignored:
            console.print(f"   - {path}", markup=False)

    if result.valid:
        if result.common_path is not None:
            console.print(f"Common path: {result.common_path or '(root)'}", markup=False)
        prefix = validator.get_commit_prefix(result)
        if prefix:
            console.print(f"Prefix:      {prefix}", markup=False)
    console.print("")


@main.command("commit-msg")
@click.argument("message_file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def commit_msg(ctx: click.Context, message_file: Path):
    """Validate the commit message in MESSAGE_FILE (commit-msg hook)."""
    try:
        _, repo_root, config = load_context(ctx.obj["path"])
        if not config.enabled:
            return

        message = read_commit_message(message_file)
        messages = get_messages(config.language)
        if is_special_commit(message):
            console.print(f"[green]✅ {messages.commit_msg_special}[/green]")
            return

        validator = CommitValidator(config)
        result = validator.validate_commit_message(message)
        for observer in make_observers(config, repo_root):
            observer.on_commit_message_validated(message, result)
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    if not result.valid:
        ctx.exit(1)


@main.command("prepare-commit-msg")
@click.argument("message_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("source", required=False)
@click.argument("sha", required=False)
@click.pass_context
def prepare_commit_msg(ctx: click.Context, message_file: Path, source: Optional[str], sha: Optional[str]):
    """Prepend the folder prefix to MESSAGE_FILE (prepare-commit-msg hook).

    Never blocks a commit: problems are reported as warnings.
    """
    if source in ("merge", "squash", "commit"):
        return

    try:
        repo, _, config = load_context(ctx.obj["path"])
        if not config.enabled:
            return

        files = get_staged_files(repo)
        if not files:
            return

        validator = CommitValidator(config)
        result = validator.validate(files)
        if not result.valid:
            return

        prefix = validator.get_commit_prefix(result)
        content = message_file.read_text(encoding="utf-8")
        lines = content.split("\n")
        first_line = lines[0].strip()
        if (
            not prefix
            or not first_line
            or first_line.startswith("#")
            or has_commit_prefix(first_line)
            or is_special_commit(first_line)
        ):
            return

        lines[0] = f"{prefix} {first_line}"
        message_file.write_text("\n".join(lines), encoding="utf-8")
        print_verbose(config, f"Added prefix {prefix}")
    except (GuardError, OSError) as e:
        console.print(f"[yellow]⚠️  Warning in prepare-commit-msg: {escape(str(e))}[/yellow]")


@main.command("post-commit")
@click.pass_context
def post_commit(ctx: click.Context):
    """Clear the violation log after a successful commit (post-commit hook)."""
    try:
        _, repo_root, config = load_context(ctx.obj["path"])
        log = FileLogObserver(str(config.get_log_file(repo_root)), config.log_max_age_hours)
        if log.clear():
            console.print(f"[green]✅ {get_messages(config.language).commit_successful}[/green]")
        log.cleanup_old_logs()
    except (GuardError, OSError) as e:
        console.print(f"[yellow]⚠️  Warning in post-commit: {escape(str(e))}[/yellow]")


@main.command()
@click.option("--force", is_flag=True, help="Replace existing hooks (a .bak copy is kept)")
@click.pass_context
def install(ctx: click.Context, force: bool):
    """Install the git hooks into this repository."""
    try:
        repo = open_repo(ctx.obj["path"])
        written = install_hooks(repo, force=force)
    except (GuardError, OSError) as e:
        console.print(f"[red]Failed to install hooks: {escape(str(e))}[/red]")
        raise click.Abort()

    for hook in written:
        console.print(f"[green]✓ Installed {hook.name}[/green]")
    skipped = [name for name, ours in installed_hooks(repo).items() if not ours]
    for name in skipped:
        console.print(f"[yellow]Skipped {name}: an existing hook is in place (use --force)[/yellow]")

    if not (Path(repo.working_tree_dir) / DEFAULT_CONFIG_FILENAME).exists():
        console.print("\nNext steps:")
        console.print("  1. Run 'git-commit-guard init' to create a config file")
        console.print("  2. Stage some files and commit as usual")


@main.command()
@click.pass_context
def uninstall(ctx: click.Context):
    """Remove the git hooks written by install."""
    try:
        removed = uninstall_hooks(open_repo(ctx.obj["path"]))
    except (GuardError, OSError) as e:
        console.print(f"[red]Failed to remove hooks: {escape(str(e))}[/red]")
        raise click.Abort()

    if not removed:
        console.print("[yellow]No git-commit-guard hooks installed[/yellow]")
    for hook in removed:
        console.print(f"[green]✓ Removed {hook.name}[/green]")


@main.command()
@click.option(
    "--preset",
    type=click.Choice(["folder-based", "conventional-commits"]),
    default="folder-based",
    help="Preset to write into the new config file",
)
@click.option("--depth", default="2", help="Folder depth or 'auto'")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, preset: str, depth: str, force: bool):
    """Create .gitcommitguard.toml with default values."""
    repo_path = ctx.obj["path"]
    config_path = repo_path / DEFAULT_CONFIG_FILENAME
    if config_path.exists() and not force:
        console.print(f"[yellow]Config file already exists: {config_path}[/yellow]")
        return

    try:
        Config(preset=preset, depth=depth).save(repo_path)
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()
    console.print(f"[green]Created new config file with default values:[/green] {config_path}")


@main.command("config-list")
@click.pass_context
def config_list(ctx: click.Context):
    """Display current configuration settings."""
    repo_path = ctx.obj["path"]
    try:
        config = Config.load(repo_path)
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    config_path = Config.find_config_file(repo_path)
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path is not None:
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    source = "config" if config_path is not None else "default"
    console.print(f"\n{'Setting':<20} {'Value':<30} {'Source':<10}")
    console.print("-" * 60)
    for name, value in config.model_dump().items():
        console.print(f"{name:<20} {str(value):<30} {source:<10}", markup=False)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@main.command("validate-config")
@click.pass_context
def validate_config(ctx: click.Context):
    """Check that the configuration loads and names a registered preset."""
    try:
        config = Config.load(ctx.obj["path"])
        validator = CommitValidator(config)
    except GuardError as e:
        console.print(f"[red]✖ Invalid configuration: {escape(str(e))}[/red]")
        ctx.exit(1)

    console.print(f"[green]✓ Configuration is valid[/green] (preset: {validator.preset_name}, depth: {escape(depth_label(config))})")


@main.command()
@click.pass_context
def presets(ctx: click.Context):
    """List the available presets, including configured plugins."""
    try:
        config = Config.load(ctx.obj["path"])
        registry = build_default_registry(config.plugins) if config.plugins else default_registry()
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    table = Table(title="Presets")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for name, preset in registry.get_all().items():
        table.add_row(name, preset.description)
    console.print(table)


@main.command()
@click.pass_context
def status(ctx: click.Context):
    """Show configuration, installed hooks and the staged files' status."""
    try:
        repo, repo_root, config = load_context(ctx.obj["path"])
        validator = CommitValidator(config)
        files = get_staged_files(repo)
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    console.print("\n[bold]git-commit-guard status[/bold]")
    console.print(f"Repository:  {repo_root}", markup=False)
    console.print(f"Branch:      {get_current_branch(repo) or '(detached)'}", markup=False)
    console.print(f"Enabled:     {config.enabled}")
    console.print(f"Preset:      {validator.preset_name}")
    console.print(f"Depth:       {depth_label(config)}", markup=False)

    hooks = installed_hooks(repo)
    console.print("Hooks:       " + ", ".join(
        f"{name} {'✓' if ours else '✗'}" for name, ours in hooks.items()
    ))

    if not files:
        console.print("Staged:      0 files")
        return

    result = validator.validate(files)
    stats = result.stats
    console.print(f"Staged:      {len(files)} files ({stats.ignored_files} ignored)")
    if result.valid:
        console.print(f"Prefix:      {escape(validator.get_commit_prefix(result))}")
        console.print("[green]✓ Staged files pass validation[/green]")
    else:
        console.print(f"[red]✖ Staged files violate the rules ({len(result.errors)} errors)[/red]")


@main.command()
@click.option(
    "--last",
    "count",
    default=DEFAULT_STATS_COUNT,
    show_default=True,
    type=click.IntRange(min=1),
    help=f"Number of recent commits to inspect (at most {MAX_STATS_COUNT})",
)
@click.pass_context
def stats(ctx: click.Context, count: int):
    """Show how commit prefixes are distributed over recent commits."""
    count = min(count, MAX_STATS_COUNT)
    try:
        repo = open_repo(ctx.obj["path"])
        counts, without_prefix, total = get_prefix_stats(repo, count)
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    if not total:
        console.print("[yellow]No commits yet[/yellow]")
        return

    table = Table(title=f"Commit Prefix Statistics (last {total} commits)")
    table.add_column("Prefix")
    table.add_column("Commits", justify="right")
    table.add_column("Share", justify="right")
    for prefix, prefix_count in counts.items():
        table.add_row(escape(f"[{prefix}]"), str(prefix_count), f"{prefix_count / total * 100:.1f}%")
    console.print(table)

    if without_prefix:
        console.print(f"\n[yellow]⚠️  Commits without prefix: {len(without_prefix)}[/yellow]")
        for subject in without_prefix[:5]:
            console.print(f"    - {subject}", markup=False)


@main.command()
@click.option("--clear", "clear_log", is_flag=True, help="Delete the violation log")
@click.pass_context
def logs(ctx: click.Context, clear_log: bool):
    """Show the violation log."""
    try:
        _, repo_root, config = load_context(ctx.obj["path"])
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    log = FileLogObserver(str(config.get_log_file(repo_root)), config.log_max_age_hours)
    if clear_log:
        if log.clear():
            console.print("[green]Violation log cleared[/green]")
        else:
            console.print("[dim]No violation log to clear[/dim]")
        return

    content = log.read()
    if not content:
        console.print("[green]No violations logged[/green]")
        return
    console.print(content, markup=False, highlight=False)


@main.command()
@click.option("--archive", is_flag=True, help="Archive the current log before cleaning up")
@click.pass_context
def cleanup(ctx: click.Context, archive: bool):
    """Remove log files older than log_max_age_hours."""
    try:
        _, repo_root, config = load_context(ctx.obj["path"])
    except GuardError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    log = FileLogObserver(str(config.get_log_file(repo_root)), config.log_max_age_hours)
    if archive:
        archived = log.archive()
        if archived is not None:
            console.print(f"Archived log to {archived.name}", markup=False)

    removed = log.cleanup_old_logs()
    stats = log.stats()
    console.print(
        f"[green]Removed {len(removed)} old log files[/green] "
        f"({stats['files']} remaining, {stats['bytes']} bytes)"
    )


if __name__ == "__main__":
    main()
