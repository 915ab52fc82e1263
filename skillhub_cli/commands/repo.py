"""Repository management commands.

CLI commands for adding, listing, updating, and removing the git
repositories that resources are discovered from.
"""

from __future__ import annotations

import json
from collections import Counter
from datetime import UTC
from datetime import datetime
from typing import NoReturn

import click
from rich.table import Table

from ..console import console
from ..console import err_console
from ..paths import create_repo_manager
from ..paths import create_scanner
from ..repos.config import RepoEntry
from ..repos.errors import CacheCleanupFailedError
from ..repos.errors import RepoError
from ..repos.errors import RepoUpdateError
from ..repos.validator import ValidationWarning
from ..repos.validator import validate_repo_content
from ..resources.models import ResourceType
from ..utils.error_format import error_message
from ..utils.error_format import error_with_hint
from ..utils.error_format import escape_markup


def fail(e: BaseException) -> NoReturn:
    """Turn a library error into a CLI error with a recovery hint."""
    raise click.ClickException(error_with_hint(e)) from e


def print_warnings(warnings: list[ValidationWarning], label: str) -> None:
    """Print validation warnings for one repository to stderr."""
    if not warnings:
        return
    err_console.print(f"[yellow]⚠ {len(warnings)} warning(s) in {escape_markup(label)}:[/yellow]")
    for warning in warnings:
        err_console.print(f"  [yellow]•[/yellow] {escape_markup(warning.path)}: {escape_markup(warning.message)}")


def actionable_warnings(entry: RepoEntry) -> list[ValidationWarning]:
    return [w for w in validate_repo_content(entry.path) if w.is_actionable()]


def format_relative_time(then: datetime, now: datetime | None = None) -> str:
    """Render a timestamp as 'just now', '5 minutes ago', '3 days ago', ...

    Examples:
        >>> now = datetime(2024, 1, 10, tzinfo=UTC)
        >>> format_relative_time(datetime(2024, 1, 8, tzinfo=UTC), now)
        '2 days ago'
    """
    now = now or datetime.now(UTC)
    if then.tzinfo is None:
        then = then.replace(tzinfo=UTC)
    seconds = int((now - then).total_seconds())

    if seconds < 60:
        return "just now"
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"


def entry_to_dict(entry: RepoEntry) -> dict:
    return entry.model_dump(mode="json")


@click.group()
def repo():
    """Manage resource repositories.

    Repositories are git repositories holding skills/, commands/, agents/,
    and mcp/ directories. Each is shallow-cloned into the local cache.

    Examples:

        \b
        # Add a repository
        skillhub repo add https://github.com/org/skills.git

        \b
        # List configured repositories
        skillhub repo list

        \b
        # Pull the latest changes for all repositories
        skillhub repo update

        \b
        # Remove a repository
        skillhub repo remove skills
    """


@repo.command()
@click.argument("url")
@click.option("--name", "-n", help="Repository name (default: derived from URL)")
def add(url: str, name: str | None):
    """Add a repository from a git URL.

    The repository is cloned into the cache and its layout is checked.

    Examples:

        \b
        skillhub repo add https://github.com/org/skills.git
        skillhub repo add git@github.com:org/skills.git --name team-skills
    """
    manager = create_repo_manager()

    console.print(f"[dim]Cloning {escape_markup(url)}...[/dim]")
    try:
        entry = manager.add(url, name)
    except RepoError as e:
        fail(e)

    console.print(f"[green]✓ Added repository {escape_markup(entry.name)}[/green]")
    console.print(f"  Location: {escape_markup(entry.path)}")
    print_warnings(actionable_warnings(entry), entry.name)


@repo.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_repos(as_json: bool):
    """List configured repositories (ordered by name)."""
    manager = create_repo_manager()
    try:
        entries = manager.list()
    except RepoError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps([entry_to_dict(e) for e in entries], indent=2))
        return

    if not entries:
        console.print("[yellow]No repositories configured[/yellow]")
        console.print("\nAdd one with:")
        console.print("  [cyan]skillhub repo add <git-url>[/cyan]")
        return

    table = Table(title="Repositories", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("URL", style="cyan")
    table.add_column("Added", style="dim")
    for entry in entries:
        table.add_row(entry.name, entry.url, format_relative_time(entry.added_at))
    console.print(table)


@repo.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(name: str, as_json: bool):
    """Show repository details and resource counts."""
    manager = create_repo_manager()
    try:
        entry = manager.get(name)
    except RepoError as e:
        fail(e)

    resources = create_scanner().scan_repo(entry.path, entry.name, entry.url)
    counts = Counter(r.type for r in resources)

    if as_json:
        data = entry_to_dict(entry)
        data["resources"] = {t.value: counts.get(t, 0) for t in ResourceType}
        click.echo(json.dumps(data, indent=2))
        return

    console.print(f"[bold]Repository:[/bold] {escape_markup(entry.name)}")
    console.print(f"  URL: {escape_markup(entry.url)}")
    console.print(f"  Location: {escape_markup(entry.path)}")
    console.print(f"  Added: {entry.added_at.isoformat()} ({format_relative_time(entry.added_at)})")
    console.print("\n[bold]Resources:[/bold]")
    for resource_type in ResourceType:
        console.print(f"  • {resource_type.directory}: {counts.get(resource_type, 0)}")


@repo.command()
@click.argument("name", required=False)
def update(name: str | None):
    """Pull the latest changes for one or all repositories.

    Updating all repositories continues past failures and reports them at
    the end.
    """
    manager = create_repo_manager()

    try:
        if name:
            console.print(f"[dim]Updating {escape_markup(name)}...[/dim]")
        else:
            entries = manager.list()
            if not entries:
                console.print("[yellow]No repositories configured[/yellow]")
                return
            console.print(f"[dim]Updating {len(entries)} repositories...[/dim]")
        updated = manager.update(name)
    except RepoUpdateError as e:
        succeeded = [entry for entry in manager.list() if entry.name not in e.failures]
        _report_updated(succeeded)
        for failed_name, error in e.failures.items():
            err_console.print(
                f"[red]✗ {escape_markup(failed_name)}:[/red] {escape_markup(error_message(error))}"
            )
        raise click.ClickException(f"{len(e.failures)} repository update(s) failed") from e
    except RepoError as e:
        fail(e)

    _report_updated(updated)


def _report_updated(entries: list[RepoEntry]) -> None:
    for entry in entries:
        console.print(f"[green]✓ Updated {escape_markup(entry.name)}[/green]")
        print_warnings(actionable_warnings(entry), entry.name)


@repo.command()
@click.argument("name")
def remove(name: str):
    """Remove a repository and delete its cached clone."""
    manager = create_repo_manager()
    try:
        manager.remove(name)
    except CacheCleanupFailedError as e:
        console.print(f"[green]✓ Removed repository {escape_markup(name)}[/green]")
        err_console.print(
            f"[yellow]⚠ Could not delete cached files at {escape_markup(e.path)}: {escape_markup(e.reason)}[/yellow]"
        )
        err_console.print("[yellow]  Delete the directory manually.[/yellow]")
        return
    except RepoError as e:
        fail(e)

    console.print(f"[green]✓ Removed repository {escape_markup(name)}[/green]")
