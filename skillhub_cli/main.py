"""skillhub command-line entry point."""

import click

from . import __version__
from .commands.repo import repo
from .commands.search import search_cmd
from .commands.validate import validate_cmd
from .logging_setup import init_logging


@click.group()
@click.version_option(version=__version__, prog_name="skillhub")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
def cli(verbose: bool):
    """skillhub - discover skills, commands, agents, and MCP servers in git repositories."""
    init_logging(verbose=verbose)


cli.add_command(repo)
cli.add_command(search_cmd)
cli.add_command(validate_cmd)


def main():
    """Entry point for the skillhub console script."""
    cli()


if __name__ == "__main__":
    main()
