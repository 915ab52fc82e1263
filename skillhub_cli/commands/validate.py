"""Repository validation command."""

from __future__ import annotations

from pathlib import Path

import click

from ..console import console
from ..paths import create_repo_manager
from ..repos.errors import RepoError
from ..repos.validator import validate_repo_content
from ..utils.error_format import escape_markup
from .repo import fail
from .repo import print_warnings


@click.command(name="validate")
@click.argument("name", required=False)
@click.option(
    "--path",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Validate a local directory instead of a configured repository",
)
@click.option("--all-warnings", is_flag=True, help="Include informational warnings (missing directories)")
@click.pass_context
def validate_cmd(ctx: click.Context, name: str | None, repo_path: Path | None, all_warnings: bool):
    """Check repository layout and manifests.

    Validates NAME, a local directory given with --path, or every configured
    repository. Exits with status 1 when problems are found.

    Examples:

        \b
        skillhub validate
        skillhub validate team-skills
        skillhub validate --path ./my-skills --all-warnings
    """
    if name and repo_path:
        raise click.UsageError("Specify either NAME or --path, not both")

    if repo_path:
        targets = [(str(repo_path), repo_path)]
    else:
        manager = create_repo_manager()
        try:
            entries = [manager.get(name)] if name else manager.list()
        except RepoError as e:
            fail(e)
        if not entries:
            console.print("[yellow]No repositories configured[/yellow]")
            return
        targets = [(entry.name, entry.path) for entry in entries]

    problems = 0
    for label, path in targets:
        warnings = validate_repo_content(path)
        if not all_warnings:
            warnings = [w for w in warnings if w.is_actionable()]
        if warnings:
            print_warnings(warnings, label)
            problems += len(warnings)
        else:
            console.print(f"[green]✓ {escape_markup(label)}: no problems found[/green]")

    if problems:
        ctx.exit(1)
