"""Resource search command."""

from __future__ import annotations

import json

import click
from rich.table import Table

from ..console import console
from ..paths import create_repo_manager
from ..paths import create_scanner
from ..repos.errors import RepoError
from ..resources.models import ResourceType
from ..resources.models import SearchOptions
from ..resources.search import search
from ..utils.error_format import escape_markup
from .repo import fail

DESCRIPTION_WIDTH = 60


@click.command(name="search")
@click.argument("query", required=False, default="")
@click.option(
    "--type",
    "-t",
    "resource_type",
    type=click.Choice([t.value for t in ResourceType]),
    help="Only show resources of this type",
)
@click.option("--repo", "-r", "repo_name", help="Only search this repository")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def search_cmd(query: str, resource_type: str | None, repo_name: str | None, as_json: bool):
    """Search skills, commands, agents, and MCP servers.

    Matches QUERY against resource names and descriptions (case-insensitive).
    Without QUERY, lists everything.

    Examples:

        \b
        skillhub search review
        skillhub search --type skill
        skillhub search lint --repo team-skills --json
    """
    manager = create_repo_manager()
    try:
        repos = [manager.get(repo_name)] if repo_name else manager.list()
    except RepoError as e:
        fail(e)

    if not repos:
        if as_json:
            click.echo("[]")
            return
        console.print("[yellow]No repositories configured[/yellow]")
        console.print("\nAdd one with:")
        console.print("  [cyan]skillhub repo add <git-url>[/cyan]")
        return

    options = SearchOptions(
        type=ResourceType(resource_type) if resource_type else None,
        repo_name=repo_name,
    )
    results = search(create_scanner().scan_all(repos), query, options)

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        console.print("[yellow]No matching resources[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Repository", style="cyan")
    table.add_column("Description")
    for resource in results:
        description = resource.description
        if len(description) > DESCRIPTION_WIDTH:
            description = description[: DESCRIPTION_WIDTH - 3] + "..."
        table.add_row(
            escape_markup(resource.name),
            resource.type.value,
            escape_markup(resource.repo_name),
            escape_markup(description),
        )
    console.print(table)
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
